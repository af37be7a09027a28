"""I/O layer: Parquet schemas, output paths, and input loading."""
