"""API Schemas — Pydantic response models for the listing endpoints."""
