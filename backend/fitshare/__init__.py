"""
FitShare Backend

Fitness tracking with a social feed: workouts, meals and progress entries,
shared as posts that other users can like and comment on.

Package Structure:
==================
    fitshare/
    ├── api/        ← FastAPI application
    ├── shared/     ← Models, repositories, services, schemas, adapters
    └── config/     ← Configuration

Running the Application:
========================
    uvicorn fitshare.api.main:app --reload
"""
