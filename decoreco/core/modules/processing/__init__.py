"""File collection, transcoding, aggregation and replacement."""
