"""API routers for Constract AI"""
