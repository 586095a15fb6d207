import logging
import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront_backend.api.auth import auth_router
from storefront_backend.api.categories import category_router
from storefront_backend.api.companies import company_router
from storefront_backend.api.products import product_router
from storefront_backend.api.reviews import review_router
from storefront_backend.api.users import user_router
from storefront_backend.database import get_engine
from storefront_backend.exceptions import register_exception_handlers
from storefront_backend.model import Base
from storefront_backend.settings import settings

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Schema migrations are out of scope; local setups can create tables on boot
    if os.environ.get("CREATE_TABLES", "false").lower() in ["true", "1", "yes"]:
        Base.metadata.create_all(get_engine())
        logger.info("Database tables created")

    yield


app = FastAPI(title="Storefront backend", lifespan=lifespan)

# Register custom exception handlers for structured error responses
register_exception_handlers(app)

origins = [
    "http://localhost:3000",
    "http://localhost:8000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router, prefix="/auth", tags=["auth"])
app.include_router(user_router, prefix="/users", tags=["users"])
app.include_router(company_router, prefix="/companies", tags=["companies"])
app.include_router(category_router, prefix="/categories", tags=["categories"])
app.include_router(product_router, prefix="/products", tags=["products"])
app.include_router(review_router, prefix="/reviews", tags=["reviews"])


@app.get("/", include_in_schema=False)
def info():
    return {"service": "storefront-backend"}


def main():
    uvicorn.run(
        "storefront_backend.server:app",
        host=os.environ.get("HOST", "0.0.0.0"),
        port=int(os.environ.get("PORT", "8000")),
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
