"""
routers/ — FastAPI route modules.

Each file contains a thin APIRouter. Shaping and forwarding logic lives in
services/. Routers validate input, call Supabase or a service, and map
failures to HTTP errors.
"""
