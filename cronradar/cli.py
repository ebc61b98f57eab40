"""
Command line interface for crontab usage.

Usage:
    cronradar ping nightly-backup --schedule "0 2 * * *"
    cronradar run nightly-backup --schedule "0 2 * * *" -- ./backup.sh
    cronradar --env-file /etc/cronradar.env sync nightly-backup "0 2 * * *"
"""

import os
import sys
import logging
import argparse
import subprocess
from typing import List, Optional

from .client import MonitorClient
from .config import MonitorConfig, load_env_file, DEFAULT_GRACE_PERIOD

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='cronradar',
        description='Report cron job executions to the monitoring service'
    )
    parser.add_argument('--env-file', help='Path to a dotenv file with MONITOR_* variables')
    parser.add_argument('--log-level', default=os.getenv('LOG_LEVEL', 'INFO'),
                        help='Logging level (default: INFO)')

    subparsers = parser.add_subparsers(dest='command', required=True)

    ping = subparsers.add_parser('ping', help='Record an execution (self-healing)')
    ping.add_argument('key', help='Monitor key')
    ping.add_argument('--schedule', help='Cron expression used to auto-register the monitor')

    start = subparsers.add_parser('start', help='Signal that a job started')
    start.add_argument('key', help='Monitor key')
    start.add_argument('--schedule', help='Cron expression of the job')

    complete = subparsers.add_parser('complete', help='Signal that a job completed')
    complete.add_argument('key', help='Monitor key')

    fail = subparsers.add_parser('fail', help='Signal that a job failed')
    fail.add_argument('key', help='Monitor key')
    fail.add_argument('--message', help='Failure message')

    sync = subparsers.add_parser('sync', help='Pre-register a monitor')
    sync.add_argument('key', help='Monitor key')
    sync.add_argument('schedule', help='Cron expression of the job')
    sync.add_argument('--name', help='Display name, generated from the key if omitted')
    sync.add_argument('--source', help='Source tag, detected if omitted')
    sync.add_argument('--grace-period', type=int, default=DEFAULT_GRACE_PERIOD,
                      help=f'Grace period in seconds (default: {DEFAULT_GRACE_PERIOD})')

    run = subparsers.add_parser('run', help='Run the command given after -- with lifecycle signals')
    run.add_argument('key', help='Monitor key')
    run.add_argument('--schedule', help='Cron expression of the job')

    return parser


def run_command(client: MonitorClient, key: str, cmd: List[str],
                schedule: Optional[str] = None) -> int:
    """Run cmd inside client.wrap() and return its exit status"""
    def execute() -> int:
        completed = subprocess.run(cmd)
        if completed.returncode != 0:
            raise subprocess.CalledProcessError(completed.returncode, cmd)
        return completed.returncode

    try:
        return client.wrap(key, execute, schedule)()
    except subprocess.CalledProcessError as e:
        return e.returncode
    except OSError as e:
        logger.error(f"Could not run {cmd[0]}: {e}")
        return 127


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    # Everything after -- is the command for 'run'
    cmd: List[str] = []
    if '--' in argv:
        index = argv.index('--')
        argv, cmd = list(argv[:index]), list(argv[index + 1:])

    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format=LOG_FORMAT)

    if args.env_file:
        load_env_file(args.env_file)

    client = MonitorClient(MonitorConfig.from_env())

    if args.command == 'ping':
        client.monitor(args.key, args.schedule)
    elif args.command == 'start':
        client.start_job(args.key, args.schedule)
    elif args.command == 'complete':
        client.complete_job(args.key)
    elif args.command == 'fail':
        client.fail_job(args.key, args.message)
    elif args.command == 'sync':
        synced = client.sync_monitor(
            args.key, args.schedule,
            source=args.source,
            name=args.name,
            grace_period=args.grace_period,
        )
        return 0 if synced else 1
    elif args.command == 'run':
        if not cmd:
            parser.error('run requires a command after --')
        return run_command(client, args.key, cmd, args.schedule)

    return 0


if __name__ == '__main__':
    sys.exit(main())
