"""View assembly helpers: series, selectors, formatting and text rendering."""
