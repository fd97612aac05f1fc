"""Application services that orchestrate the allocation core and persistence."""
