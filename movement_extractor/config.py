from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # OCR
    TESSERACT_CMD: str = "/usr/local/bin/tesseract"  # macOS default
    OCR_LANGUAGE: str = "spa+eng"
    OCR_DEFAULT_QUALITY: str = "medium"
    OCR_CONFIG: str = r"--oem 3 --psm 6"

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
