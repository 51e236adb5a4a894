import logging

import uvicorn

from api.routes.loans import app
from api.rpc.servicer import create_server
from config import Config
from db.database import Base, SessionLocal, engine
from db.seed import seed_accounts

logger = logging.getLogger(__name__)


def initialize_database():
    """
    Creates all tables defined by models that inherit from Base,
    then seeds demo accounts when SEED_DEMO_ACCOUNTS is set.
    """
    logger.info("Creating database tables...")
    # This command checks all classes inheriting from Base and creates
    # the corresponding tables if they don't already exist.
    Base.metadata.create_all(bind=engine)
    logger.info("Tables created successfully.")

    if Config.SEED_DEMO_ACCOUNTS:
        with SessionLocal() as db:
            seed_accounts(db)


if __name__ == "__main__":
    initialize_database()

    grpc_server, grpc_port = create_server(f"[::]:{Config.GRPC_PORT}")
    grpc_server.start()
    logger.info("gRPC server listening on port %d", grpc_port)
    try:
        uvicorn.run(app, host=Config.HOST, port=Config.PORT)
    finally:
        grpc_server.stop(grace=5)
