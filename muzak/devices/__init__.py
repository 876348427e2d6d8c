"""Audio output device interfaces, a dummy device, sample formats and sample conversion."""