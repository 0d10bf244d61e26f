"""
Routers FastAPI de l'application d'inscription des candidats
"""
from .candidats import router as candidats_router
from .dashboard import router as dashboard_router
from .exports import router as exports_router

# Configuration des routers avec préfixes et tags
router_configs = [
    (candidats_router, "/candidats", ["candidats"]),
    (dashboard_router, "/dashboard", ["dashboard"]),
    (exports_router, "/exports", ["exports"]),
]
