from __future__ import annotations

"""
Command-line entry point.

    yeipee classify TEMPLATE
    yeipee render TEMPLATE [--model FILE] [--defer] ...
"""

import argparse
import logging
import os
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Sequence

from yeipee.core.models import ClientStatus
from yeipee.errors import YeipeeError
from yeipee.logging.helpers import configure_logging, get_logger
from yeipee.parsing.fragments import FragmentClassifier
from yeipee.runtime.config import YeipeeConfig
from yeipee.runtime.status import detect_status

logger = get_logger('cli')


def _configure_logging(enable_json: bool) -> None:
    configure_logging(json_logs=enable_json, level=logging.INFO)


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('--json-logs', action='store_true', default=None,
                        help='emit JSON log lines (YEIPEE_JSON_LOGS=1)')


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='yeipee',
        description='Classify or render YEAST templates on the server.',
    )
    sub = parser.add_subparsers(dest='command', metavar='COMMAND')
    sub.required = True

    cls = sub.add_parser('classify', help='print the fragments of a template')
    cls.add_argument('template', type=Path, metavar='TEMPLATE')
    cls.add_argument('--encoding', default='utf-8')
    _add_common(cls)

    ren = sub.add_parser('render', help='render a template against a model')
    ren.add_argument('template', type=Path, metavar='TEMPLATE')
    ren.add_argument('--model', type=Path, metavar='FILE',
                     help='model section (bare script or <script> element); empty when omitted')
    ren.add_argument('--encoding', default='utf-8')
    ren.add_argument('--id', dest='template_id', default=None,
                     help='template id used in logs (defaults to the file name)')
    ren.add_argument('--defer', action='store_true',
                     help='leave processing to the client: substitute the model only')
    ren.add_argument('--library-path', default=None, metavar='DIR',
                     help='directory searched for library scripts (YEIPEE_LIBRARY_PATH)')
    ren.add_argument('--timeout', type=float, default=None, metavar='S',
                     help='seconds per evaluation, 0 disables (YEIPEE_EVAL_TIMEOUT)')
    _add_common(ren)
    return parser


def _format_fragment(idx: int, frag) -> str:
    span = f'{frag.exec_span[0]}-{frag.exec_span[1]}' if frag.exec_span else '-'
    return f'{idx:>4}  {frag.kind.value:<8} span={span:<12} offset={frag.offset:<8} length={len(frag.content)}'


def _cmd_classify(ns: argparse.Namespace) -> List[str]:
    fragments = FragmentClassifier().classify(ns.template.read_bytes(), ns.encoding)
    return [_format_fragment(i, f) for i, f in enumerate(fragments)]


def _cmd_render(ns: argparse.Namespace, cfg: YeipeeConfig) -> List[str]:
    from yeipee import processor_factory

    if ns.library_path:
        cfg = replace(cfg, library_path=ns.library_path)
    if ns.timeout is not None:
        cfg = replace(cfg, eval_timeout=ns.timeout or None)

    model = ns.model.read_text(encoding=ns.encoding) if ns.model else ''
    if ns.defer:
        status: Optional[ClientStatus] = ClientStatus.DEFER_AND_SEND_OFF
    else:
        status = detect_status(may_process_on_server=cfg.may_process_on_server)

    build = processor_factory(config=cfg)
    processor = build(ns.template.read_bytes(), encoding=ns.encoding,
                      template_id=ns.template_id or ns.template.name)
    try:
        return [processor.render(model, status)]
    finally:
        processor.close()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the CLI and return the process exit status."""
    ns = _build_parser().parse_args(list(sys.argv[1:] if argv is None else argv))
    try:
        cfg = YeipeeConfig.from_env()
    except ValueError as exc:
        _configure_logging(False)
        logger.error('invalid configuration: %s', exc)
        return 1
    _configure_logging(cfg.json_logs if ns.json_logs is None else ns.json_logs)

    try:
        if ns.command == 'classify':
            lines = _cmd_classify(ns)
        else:
            lines = _cmd_render(ns, cfg)
    except KeyboardInterrupt:
        logger.error('Interrupted by user.')
        return 130
    except (YeipeeError, OSError) as exc:
        if os.getenv('DEBUG') == '1':
            raise
        logger.error('%s', exc)
        return 1

    for line in lines:
        sys.stdout.write(line)
        if not line.endswith('\n'):
            sys.stdout.write('\n')
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
