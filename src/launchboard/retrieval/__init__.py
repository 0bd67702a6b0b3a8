"""Retrieval layer: endpoint descriptors and HTTP-executing sessions."""
