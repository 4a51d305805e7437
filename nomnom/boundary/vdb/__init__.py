"""
Vector database boundary layer.

Provides the Neo4j vector index adapter used for recipe retrieval.
- Neo4jVectorIndex: async similarity search over an existing vector index

Dependencies: neo4j
System role: Vector store adapter for RAG retrieval
"""

from nomnom.boundary.vdb.neo4j_vector_index import Neo4jVectorIndex
from nomnom.boundary.vdb.vector_schemas import VectorQuery, VectorSearchResult

__all__ = [
    "Neo4jVectorIndex",
    "VectorQuery",
    "VectorSearchResult",
]
