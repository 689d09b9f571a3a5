from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from announcements import router as announcements_router
from articles import router as articles_router
from auth import router as auth_router
from categories import router as categories_router
from content import router as content_router
from core import config, db
from core.errors import register_error_handlers
from core.log import configure_logging
from exchange_rates import router as exchange_rates_router
from tags import router as tags_router
from tenders import router as tenders_router

@asynccontextmanager
async def lifespan(_: FastAPI):
    configure_logging()
    # Initialize the DB pool once per process.
    await db.init_pool()
    try:
        yield
    finally:
        await db.close_pool()


app = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(articles_router.router, tags=["articles"])
app.include_router(tenders_router.router, tags=["tenders"])
app.include_router(announcements_router.router, tags=["announcements"])
app.include_router(tags_router.router, tags=["tags"])
app.include_router(categories_router.router, tags=["categories"])
app.include_router(exchange_rates_router.router, tags=["exchange-rates"])
app.include_router(content_router.router, tags=["content"])
app.include_router(auth_router.router, tags=["auth"])

# Uploaded files are served locally only when the public URL is a path on this host.
if config.public_files_url().startswith("/"):
    app.mount(
        config.public_files_url(),
        StaticFiles(directory=config.upload_dir(), check_dir=False),
        name="files",
    )


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "content api"}
