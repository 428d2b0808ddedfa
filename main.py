import argparse
import asyncio
import json

import uvicorn
from dotenv import load_dotenv

from app.core.config import Settings, load_settings
from app.core.logger import set_level
from app.core.services import build_services

load_dotenv()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser("sales-genius")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("serve", help="run the HTTP server")

    ask = sub.add_parser("ask", help="answer one question from the search index")
    ask.add_argument("question")

    machines = sub.add_parser("machines", help="look up machines by vehicle type")
    machines.add_argument("vehicle_type")
    machines.add_argument("--manufacturer")
    machines.add_argument("--model", dest="model_keyword")

    files = sub.add_parser("files", help="list blobs in the container")
    files.add_argument("--prefix", default="")

    sas = sub.add_parser("sas-url", help="print a read-only signed URL for a blob")
    sas.add_argument("name")
    return parser


async def run(args: argparse.Namespace, settings: Settings):
    services = build_services(settings)
    try:
        if args.command == "ask":
            print(await services.chat.multi_step_chat(args.question))
        elif args.command == "machines":
            result = await services.machines.get_machine_list(
                args.vehicle_type,
                manufacturer=args.manufacturer,
                model_keyword=args.model_keyword,
            )
            print(json.dumps(result.model_dump(), ensure_ascii=False, indent=2))
        elif args.command == "files":
            for name in await services.blob_store.list_files(args.prefix):
                print(name)
        elif args.command == "sas-url":
            print(services.blob_store.get_sas_url(args.name))
    finally:
        await services.aclose()


def main(argv=None):
    args = build_parser().parse_args(argv)
    settings = load_settings()
    set_level(settings.ENV)

    if args.command == "serve":
        from app.main import app

        uvicorn.run(app, host=settings.HOST, port=settings.PORT)
    else:
        asyncio.run(run(args, settings))


if __name__ == "__main__":
    main()
