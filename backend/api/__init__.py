"""HTTP layer: dependencies, helpers and routers."""
