"""
routers/ — FastAPI route modules.

Each file contains a thin APIRouter. Routers take the request body,
call the backing service through DataService, and shape the response.
"""
