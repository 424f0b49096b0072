"""Agent module - pipeline orchestration and runner."""
