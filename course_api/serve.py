"""Run the API with uvicorn.

Usage:
    python -m course_api.serve
"""
import uvicorn

from course_api.core import config


def main() -> None:
    uvicorn.run("course_api.main:app", host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    main()
