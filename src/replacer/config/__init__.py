"""Configuration — replacer.toml models, discovery, settings, and logging."""
