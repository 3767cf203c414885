"""Add patterns to git ignore files, keeping them sorted and deduplicated."""
