"""
API router aggregator: wires all endpoint modules together.
"""

from fastapi import APIRouter

from app.api.endpoints import activities, announcements, attendance, auth, employees, projects, tasks

api_router = APIRouter()

# Signup, login, profile, password
api_router.include_router(auth.router)

# HR records and daily attendance
api_router.include_router(employees.router)
api_router.include_router(attendance.router)

# Work tracking
api_router.include_router(tasks.router)
api_router.include_router(projects.router)

# Dashboards
api_router.include_router(announcements.router)
api_router.include_router(activities.router)
