from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    native_symbol: str = "XTZ"
    native_name: str = "Tezos"
    native_decimals: int = 6
    max_parameter_depth: int = 64  # keep well under the interpreter recursion limit
    max_parameter_nodes: int = 4096
    assets_file: str = ""  # JSON list of extra known assets
    include_default_assets: bool = True
    debug: bool = True

    class Config:
        env_file = ".env"


settings = Settings()
