"""Photo portfolio backend: profiles, albums and images with S3 uploads."""
