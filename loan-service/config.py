import os
import dotenv

dotenv.load_dotenv(override=True)


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./loan_service.db")
    # "scan" walks every account like the legacy service, "indexed" queries by account_number
    ACCOUNT_LOOKUP_STRATEGY: str = os.getenv("ACCOUNT_LOOKUP_STRATEGY", "scan")
    OPTIMISTIC_LOCKING: bool = _env_flag("OPTIMISTIC_LOCKING")
    SEED_DEMO_ACCOUNTS: bool = _env_flag("SEED_DEMO_ACCOUNTS")
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "*")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))
    GRPC_PORT: int = int(os.getenv("GRPC_PORT", "50051"))


class KafkaConfig:
    BOOTSTRAP_SERVERS = os.getenv("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092")
    LOAN_DECISIONS_TOPIC = os.getenv("KAFKA_LOAN_DECISIONS_TOPIC", "loan_decisions")
    LOAN_EVENTS_ENABLED = _env_flag("KAFKA_LOAN_EVENTS_ENABLED")
