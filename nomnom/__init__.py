"""
NOMNOM recipe assistant.

Retrieval-grounded recipe Q&A over a Neo4j vector index with streamed answers.
"""

__version__ = "0.1.0"
