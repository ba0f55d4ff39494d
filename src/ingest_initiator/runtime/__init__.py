"""Runtime logic: interval expansion, file naming and the ingest gate."""
