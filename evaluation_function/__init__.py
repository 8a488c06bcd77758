"""Evaluation Function — the comparison routine wired into this deployment."""
