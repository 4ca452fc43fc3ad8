"""Single-host bootstrap orchestrator for downloaded service executables."""
