from bookstore.seed.planner import SeedDataError, SeedReport, count_documents, seed_if_empty

__all__ = ["SeedDataError", "SeedReport", "count_documents", "seed_if_empty"]
