"""
Media ingestion and retrieval service.
"""
