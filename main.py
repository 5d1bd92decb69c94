import logging
import sys
import json
import argparse
from pathlib import Path

from core.app_context import AppContext
from core.config_loader import load_config
from database.database import configure_database
from database.init_db import init_db
from database.uow import catalog_uow
from etl.resume.exceptions import ResumeProcessingError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def parse_command(ctx: AppContext, path: Path, legacy: bool) -> dict:
    """Parse a resume file without touching the database."""
    text = ctx.extractor.extract(path.read_bytes(), path.name)

    if legacy:
        bullets = ctx.extraction_service.extract_tagged_bullets(text)
        return {'bullet_points': [{'text': b.text, 'tags': b.tags} for b in bullets]}

    result = ctx.extraction_service.parse_resume_structure(text)
    output = result.resume.to_dict()
    output['rejected'] = [
        {'kind': r.kind, 'index': r.index, 'job_index': r.job_index, 'reason': r.reason}
        for r in result.rejected
    ]
    return output


def import_command(ctx: AppContext, path: Path, external_user_id: str) -> dict:
    """Run the full upload pipeline against the configured database."""
    with catalog_uow() as repo:
        summary = ctx.import_service.process_upload(
            repo, external_user_id, path.read_bytes(), path.name
        )
    return summary.to_dict()


def main(argv=None):
    parser = argparse.ArgumentParser(description="careerlog resume tools")
    parser.add_argument('--config', type=str, default='config.yaml', help='Path to config.yaml')
    subparsers = parser.add_subparsers(dest='command', required=True)

    parse_parser = subparsers.add_parser('parse', help='Parse a resume and print the result as JSON')
    parse_parser.add_argument('file', type=Path)
    parse_parser.add_argument('--legacy', action='store_true',
                              help='Flat bullet points with tags instead of the full structure')

    import_parser = subparsers.add_parser('import', help='Parse a resume and import it for a user')
    import_parser.add_argument('file', type=Path)
    import_parser.add_argument('--user', required=True, help='External user id')

    subparsers.add_parser('init-db', help='Create the database tables')

    args = parser.parse_args(argv)

    config = load_config(args.config)
    configure_database(config.database.url)

    if args.command == 'init-db':
        init_db()
        return 0

    if not args.file.is_file():
        logger.error(f"File not found: {args.file}")
        return 2

    ctx = AppContext.build(config)
    try:
        if args.command == 'parse':
            output = parse_command(ctx, args.file, args.legacy)
        else:
            output = import_command(ctx, args.file, args.user)
    except ResumeProcessingError as e:
        logger.error(f"{args.command} failed: {e}")
        return 1

    print(json.dumps(output, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
