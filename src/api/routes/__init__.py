"""
API Routes - HTTP endpoint handlers

Each area (overlays, sessions, brand, system) has its own router, included in the
app under /api/v1.
"""
