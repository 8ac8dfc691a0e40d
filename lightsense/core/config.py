from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="LIGHTSENSE_", extra="ignore")

    app_name: str = "MAX44004 Light Sensor"

    # Transport: "sim" for development, "smbus" for /dev/i2c-N
    transport_mode: str = Field(default="sim")

    # I2C
    i2c_bus: int = 1
    i2c_address: int = Field(default=0x40, ge=0x03, le=0x77)
    i2c_force: bool = False

    # Simulated register file
    sim_light: int = Field(default=1200, ge=0, le=16383)

    # Logging
    log_level: str = "INFO"
    log_file: str = "lightsense.log"
    log_max_bytes: int = 2_000_000
    log_backup_count: int = 5


settings = Settings()
