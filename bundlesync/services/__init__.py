"""Service layer — request validation and orchestration of the engines."""
