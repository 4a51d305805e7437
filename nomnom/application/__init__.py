"""Application layer: service context, pipeline orchestration and answer streaming."""
