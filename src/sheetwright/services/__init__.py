"""Application services built on the database layer and the engine."""
