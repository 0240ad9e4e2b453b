"""Feature modules: match ingestion and player summary reducers."""
