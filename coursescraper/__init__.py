"""One-shot compound class scraper.

Fetches a single page, selects the elements carrying two required class
names and prints the text of each match, one per line.
"""
