"""CLI module for ubuntu-diag."""
