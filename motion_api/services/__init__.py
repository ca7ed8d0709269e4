"""
services/ — Shaping and forwarding logic behind the routers.

Routers validate input and map failures to HTTP errors; the functions here
build Supabase rows, reshape stored rows for the clients, and forward
requests to the Motion backend.
"""
