"""Parameter resolution and the render pipeline."""
