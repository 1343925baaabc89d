from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = Field("Kop Kenya Sign-up API", env="APP_NAME")
    ENV: str = Field("dev", env="ENV")
    HOST: str = Field("0.0.0.0", env="HOST")
    PORT: int = Field(5005, env="PORT")
    LOG_LEVEL: str = Field("INFO", env="LOG_LEVEL")
    MONGO_URI: str = Field("mongodb://localhost:27017", env="MONGO_URI")
    MONGO_DB: str = Field("kop_kenya", env="MONGO_DB")
    MEMBERS_COLLECTION: str = Field("members", env="MEMBERS_COLLECTION")
    MIN_AGE: int = Field(18, env="MIN_AGE")
    PHONE_MIN_DIGITS: int = Field(8, env="PHONE_MIN_DIGITS")
    PHONE_MAX_DIGITS: int = Field(15, env="PHONE_MAX_DIGITS")


    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

settings = Settings()
