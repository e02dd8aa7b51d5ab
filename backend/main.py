import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError

from backend.core import config
from backend.database import Base, engine
from backend.errors import register_exception_handlers
from backend.models import booked_class, payment, sport_class, user  # noqa: F401
from backend.routes import auth_routes, booking_routes, class_routes, payment_routes, user_routes

app = FastAPI(title='SportWing API')

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

register_exception_handlers(app)

logger = logging.getLogger(__name__)


@app.on_event('startup')
def initialize_database() -> None:
    config.validate_runtime_config()
    try:
        Base.metadata.create_all(bind=engine)
        logger.info('SportWing database ready')
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL and database credentials.')


@app.get('/', response_class=PlainTextResponse)
def root():
    return 'SportWing is Running'


app.include_router(auth_routes.router)
app.include_router(booking_routes.router)
app.include_router(user_routes.router)
app.include_router(class_routes.router)
app.include_router(payment_routes.router)


if __name__ == '__main__':
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host='0.0.0.0', port=config.PORT)
