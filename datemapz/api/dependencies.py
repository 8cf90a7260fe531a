from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator

from fastapi import FastAPI

from datemapz.api.planner_service import PlannerService
from datemapz.core.config import ApiSettings


@lru_cache(maxsize=1)
def get_planner_service() -> PlannerService:
    settings = ApiSettings.from_env()
    return PlannerService(settings)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    try:
        yield
    finally:
        if get_planner_service.cache_info().currsize:
            await get_planner_service().close()
