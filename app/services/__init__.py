"""Service clients used by the catalog viewer."""
