"""
Boundary layer.

Adapters for the three external services: the embedding model,
the Neo4j vector index and the generation model.
"""
