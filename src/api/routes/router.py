"""Versioned API router aggregating the resource routers."""

from fastapi import APIRouter

from src.api.routes import contact, projects, services, team

api_router = APIRouter()
api_router.include_router(projects.router, prefix="/projects", tags=["projects"])
api_router.include_router(services.router, prefix="/services", tags=["services"])
api_router.include_router(team.router, prefix="/team", tags=["team"])
api_router.include_router(contact.router, prefix="/contact", tags=["contact"])
