from contextlib import asynccontextmanager

from fastapi import FastAPI
from nongli.api.public import mingpi_router, router as public_router, startup_check


@asynccontextmanager
async def lifespan(_app: FastAPI):
    startup_check()
    yield


app = FastAPI(title="nongli public api", lifespan=lifespan)
app.include_router(public_router)
app.include_router(mingpi_router)
