"""Core analysis pipeline: models, fraud catalog, scoring, analyzers, orchestrator."""
