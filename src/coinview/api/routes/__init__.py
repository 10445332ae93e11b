"""Route modules: JSON query API, page data loaders and the sitemap."""
