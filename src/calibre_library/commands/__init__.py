"""Adapters translating typed options into calibredb subcommands."""
