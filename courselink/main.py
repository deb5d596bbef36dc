import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from courselink.core import config
from courselink.database import Base, engine, ensure_booking_schema
from courselink.models import booking_slot, defence_session, task_category, user  # noqa: F401
from courselink.routes import auth_routes, booking_slot_routes, defence_session_routes

logging.basicConfig(level=config.LOG_LEVEL)

app = FastAPI(title='Courselink Defence Scheduling API')

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

logger = logging.getLogger(__name__)


@app.on_event('startup')
def initialize_database() -> None:
    config.validate_runtime_config()
    try:
        Base.metadata.create_all(bind=engine)
        ensure_booking_schema()
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL and Postgres credentials.')


@app.get('/')
def root():
    return {'status': 'Defence Scheduling API Running'}


app.include_router(auth_routes.router, prefix='/auth')
app.include_router(booking_slot_routes.router, prefix='/booking-slots')
app.include_router(defence_session_routes.router, prefix='/defence-sessions')
