"""Custom components namespace for DropIndex tests."""
