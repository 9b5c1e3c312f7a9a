"""Research paper analyzer: PDF upload -> three assistant analyses."""
