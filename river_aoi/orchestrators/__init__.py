"""Orchestrators.

- region_pipeline: Load, project, build and summarise regions
"""
