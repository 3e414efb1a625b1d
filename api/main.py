from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from applications import router as applications_router
from core import config, db, errors
from posts import router as posts_router

@asynccontextmanager
async def lifespan(_: FastAPI):
    # Initialize the DB pool once per process.
    await db.init_pool()
    try:
        yield
    finally:
        await db.close_pool()


app = FastAPI(title="Posts & Applications API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins(),
    allow_methods=["*"],
    allow_headers=["*"],
)

errors.install(app)

app.include_router(posts_router.router, tags=["posts"])
app.include_router(applications_router.router, tags=["applications"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "posts-applications api"}


def run() -> None:
    config.configure_logging()
    uvicorn.run(app, host="0.0.0.0", port=config.port(), log_config=None)


if __name__ == "__main__":
    run()
