"""Document engine: fact extraction, variable resolution and rendering."""
