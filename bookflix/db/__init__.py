"""Relational storage for users and their reading documents."""
