"""Media provider interfaces, decoded samples, track metadata and media errors."""