"""
TalentLink Job Board Backend.

Core components:
- db: Store registry and table models for accounts and jobs
- services: Account/Job stores, application and job lifecycle workflows
- api: FastAPI application and routes
"""
