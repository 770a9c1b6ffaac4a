import logging
from typing import Optional

from fastapi import FastAPI, Query

from household.api.routes import chores, grocery, meal_plan
from household.events.web_observers import start as start_event_observers, get_events as get_web_events

# Logging
logger = logging.getLogger("household_app")

# Initialize FastAPI app
app = FastAPI(title="Household Chores & Shopping API")

# Include routers
app.include_router(chores.router)
app.include_router(chores.members_router)
app.include_router(meal_plan.router)
app.include_router(grocery.router)

start_event_observers()
logger.info("Web observers for ledger events started")


@app.get("/api/events")
def api_events(since: Optional[int] = Query(default=None)):
    """Recent ledger/grocery events newer than the `since` cursor."""
    return get_web_events(since)
