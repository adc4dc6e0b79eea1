"""HTTP Layer — FastAPI routers, dependencies and global error handlers."""
