from os import getenv

class Settings:
    DATABASE_URL = getenv("DATABASE_URL", "postgresql+psycopg://tasks:tasks@db:5432/tasks")
    JWT_SECRET = getenv("JWT_SECRET", "dev-secret-change-in-prod")
    JWT_ALGORITHM = getenv("JWT_ALGORITHM", "HS256")
    JWT_EXPIRE_MIN = int(getenv("JWT_EXPIRE_MIN", "60"))  # durée de vie du token d'accès
    LOG_LEVEL = getenv("LOG_LEVEL", "INFO")

settings = Settings()
