"""Music library records and discovery of files to scan."""