"""Services Layer — use-case orchestration over the repository interfaces."""
