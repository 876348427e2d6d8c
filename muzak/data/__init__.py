"""Commands sent to the background image and metadata worker."""