"""Starter .xtentropy.toml template."""

DEFAULT_TOML = """\
# xt-entropy configuration
version = "1.0"

[scan]
operation = "rvs"         # rvs (refine volume snapshot) | dbc (directory browser)
max_item_bytes = 0        # 0 = read items of any size
min_host_version = 1990
show_progress = true

[output]
format = "terminal"       # terminal | json
show_summary = true

[annotation]
category = "entropy"
"""
