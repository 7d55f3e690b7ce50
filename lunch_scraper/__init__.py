"""Prague lunch-menu scraping pipeline.

Usage::

    python -m lunch_scraper                          # Incremental: only restaurants without a menu yet
    python -m lunch_scraper --restaurant tiskarna    # One restaurant, always rescraped
    python -m lunch_scraper --restaurant=tiskarna
    python -m lunch_scraper --data-dir public/data/menus --verbose
"""
