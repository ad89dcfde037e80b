"""
Site crawlers built on the listingscraper crawl loop.

Each subpackage defines the selectors, extractor and Site definition of one
target; ``crawlers.registry`` maps site names to those definitions and
``crawlers.runner`` is the command-line entry point.
"""
