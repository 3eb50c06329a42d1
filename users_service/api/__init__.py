"""HTTP layer: app assembly, dependencies and resource routers."""
