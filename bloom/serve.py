import uvicorn

from bloom.config import settings

def main() -> None:
    uvicorn.run("bloom.main:app", host=settings.app_host, port=settings.app_port, reload=settings.is_dev)

if __name__ == "__main__":
    main()
