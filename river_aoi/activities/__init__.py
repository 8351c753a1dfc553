"""Region-building activities.

Each module implements one step:
- load_inputs: Read sites and river lines with fiona
- clip_upstream: Trim the river to one side of a site
- build_regions: Buffer trimmed rivers and sites into regions
- summarize_regions: Count empty and failed regions
"""
