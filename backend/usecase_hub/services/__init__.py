"""Services Layer - orchestration of validation, persistence and notification."""
