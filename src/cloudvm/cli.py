#!/usr/bin/env python3
"""
cloudvm CLI

Usage:
    cloudvm [run] [<program>] [--config FILE] [--log-level LEVEL] [--log-file FILE] [--trace]
    cloudvm disasm <program>
    cloudvm eval <program> <x> <y> <z>
    cloudvm --version

Commands:
    run      Evaluate the program over the grid, print calibration number and clouds
    disasm   Decode a listing and print it back, one numbered instruction per line
    eval     Run the program at a single point and print the result
"""

import argparse
import logging
import sys

from cloudvm import __version__
from cloudvm.clouds import cloud_sizes, find_clouds
from cloudvm.config import LOG_LEVELS, RunConfig
from cloudvm.decoder import format_instruction, load_program
from cloudvm.errors import CloudVMError
from cloudvm.evaluator import evaluate_grid
from cloudvm.grid import Point
from cloudvm.logging_config import setup_logging
from cloudvm.vm import StackMachine

logger = logging.getLogger('cloudvm.cli')


def _fail(message):
    logger.error(message)
    print(f"error: {message}", file=sys.stderr)
    return 1


def cmd_run(args):
    """Full pipeline: decode, evaluate the grid, count clouds."""
    try:
        config = RunConfig.from_file(args.config) if args.config else RunConfig()
        config.override(
            program_path=args.program,
            log_level=args.log_level,
            log_file=args.log_file,
            trace=True if args.trace else None,
        )
    except ValueError as e:
        return _fail(f"invalid config: {e}")
    setup_logging(config.log_level, config.log_file, config.log_json)
    logger.debug("Run config", extra={"extra_data": {"config": config.to_dict()}})

    program = load_program(config.program_path)
    evaluation = evaluate_grid(program, trace=config.trace)
    clouds = find_clouds(evaluation.active)
    logger.info(f"Cloud sizes: {cloud_sizes(clouds)}")

    print(f"Calibration number: {evaluation.calibration_number}")
    print(f"Clouds: {len(clouds)}")
    return 0


def cmd_disasm(args):
    """Decode a listing and print it in canonical form."""
    program = load_program(args.program)
    for index, inst in enumerate(program):
        print(f"{index:4d}: {format_instruction(inst)}")
    return 0


def cmd_eval(args):
    """Run the program at one point."""
    program = load_program(args.program)
    print(StackMachine(program).execute(Point(args.x, args.y, args.z)))
    return 0


def build_parser():
    parser = argparse.ArgumentParser(prog='cloudvm', description="cloudvm grid evaluator")
    parser.add_argument('--version', action='version', version=f'cloudvm {__version__}')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    run_parser = subparsers.add_parser('run', help='Evaluate program over the grid')
    run_parser.add_argument('program', nargs='?', help='Program listing (default: input_program.txt)')
    run_parser.add_argument('--config', help='JSON run config')
    run_parser.add_argument('--log-level', choices=LOG_LEVELS, type=str.upper)
    run_parser.add_argument('--log-file', help='Also write logs to this file')
    run_parser.add_argument('--trace', action='store_true', help='Log every executed instruction')

    disasm_parser = subparsers.add_parser('disasm', help='Decode and print a listing')
    disasm_parser.add_argument('program', help='Program listing')

    eval_parser = subparsers.add_parser('eval', help='Run program at one point')
    eval_parser.add_argument('program', help='Program listing')
    eval_parser.add_argument('x', type=int)
    eval_parser.add_argument('y', type=int)
    eval_parser.add_argument('z', type=int)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        # Bare invocation behaves like `run` on the default listing
        args = parser.parse_args(['run'])

    # `run` reconfigures this from its RunConfig
    setup_logging()

    commands = {
        'run': cmd_run,
        'disasm': cmd_disasm,
        'eval': cmd_eval,
    }

    try:
        return commands[args.command](args)
    except (CloudVMError, OSError) as e:
        return _fail(str(e))


if __name__ == '__main__':
    sys.exit(main())
