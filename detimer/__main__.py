"""Command-line entry point: python -m detimer.

Examples::

    detimer -m 25                       # one 25 minute countdown
    detimer -m 25 -i 5 -c 4 --som       # 4 sprints with 5 minute intervals
    detimer -s 90 -o /tmp/timer.txt     # keep the current value in a file
    detimer -m 50 -i                    # ask for each interval, loop forever
"""

from __future__ import annotations

import argparse
import logging
import signal
import sys
from pathlib import Path
from typing import Sequence

from .audio.sounds import SoundNotifier, builtin_chime_path
from .console import ConsoleOperator
from .errors import AudioError, InvalidInput, SinkIOError
from .logging_config import setup_logging
from .settings import Settings, load_settings
from .sinks import open_sink
from .timer.cycles import Mode, RunConfig, build_orchestration, select_mode
from .timer.duration import normalize
from .timer.engine import TickEngine, ensure_app

logger = logging.getLogger("detimer")

ASK = "ask"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="detimer",
        description="Contador regressivo para lives, com sprints e intervalos.",
    )
    when = parser.add_mutually_exclusive_group(required=True)
    when.add_argument("-s", "--segundos", type=int, dest="seconds", metavar="N",
                      help="quanto tempo em segundos deve contar")
    when.add_argument("-m", "--minutos", type=int, dest="minutes", metavar="N",
                      help="quanto tempo em minutos deve contar")

    parser.add_argument("-o", "--output", metavar="ARQUIVO",
                        help="pra onde escrever o tempo (por padrão stdout)")
    parser.add_argument("--status-output", metavar="ARQUIVO",
                        help="pra onde escrever 'Sprint n' / 'Intervalo n' (por padrão stdout)")

    parser.add_argument("-i", "--intervalo", nargs="?", const=ASK, dest="interval",
                        metavar="MIN",
                        help="minutos de intervalo entre sprints; sem valor, pergunta a cada ciclo")
    parser.add_argument("-c", "--ciclos", type=int, dest="cycles", metavar="N",
                        help="quantidade de sprints (exige --intervalo MIN)")

    parser.add_argument("--som", nargs="?", const="", dest="sound", metavar="WAV",
                        help="toca um som ao fim de cada contagem; sem arquivo, usa o som padrão")
    parser.add_argument("--volume", type=int, metavar="0-100",
                        help="volume do som")

    parser.add_argument("--config", type=Path, metavar="JSON",
                        help="arquivo de configuração alternativo")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="mais mensagens de log no stderr (-vv para debug)")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def config_from_args(args: argparse.Namespace) -> RunConfig:
    """Validated run configuration from parsed arguments."""
    duration = normalize(seconds=args.seconds, minutes=args.minutes)

    interval = None
    interactive = False
    if args.interval == ASK:
        interactive = True
    elif args.interval is not None:
        try:
            minutes = int(args.interval)
        except ValueError:
            raise InvalidInput(f"intervalo inválido: {args.interval!r}") from None
        interval = normalize(minutes=minutes)

    if args.cycles is not None and interactive:
        raise InvalidInput("--ciclos exige a duração do intervalo (--intervalo MIN)")

    if args.output and args.status_output and (
        Path(args.output).resolve() == Path(args.status_output).resolve()
    ):
        # FileSink keeps one line, so a shared file would lose every label.
        raise InvalidInput("--output e --status-output devem ser arquivos diferentes")

    return RunConfig(
        duration=duration,
        interval=interval,
        cycles=args.cycles,
        interactive_interval=interactive,
    ).validate()


def build_notifier(args: argparse.Namespace, settings: Settings) -> SoundNotifier | None:
    """The sound to play after each countdown, or None without --som."""
    if args.sound is None:
        return None
    volume = args.volume if args.volume is not None else settings.sound_volume
    if args.sound:
        path = Path(args.sound).expanduser()
    elif settings.sound_path:
        path = Path(settings.sound_path).expanduser()
    else:
        path = builtin_chime_path(Path(settings.cache_dir).expanduser())
    return SoundNotifier(path, volume=volume)


def _log_level(verbose: int, default: str) -> int | str:
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return default.upper()


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    settings = load_settings(args.config)
    setup_logging(_log_level(args.verbose, settings.log_level))

    # Ctrl+C ends the process; the Qt event loop would otherwise swallow it.
    signal.signal(signal.SIGINT, signal.SIG_DFL)
    ensure_app()

    try:
        config = config_from_args(args)
        mode = select_mode(config)
        notifier = build_notifier(args, settings)
        sink = open_sink(args.output)
        status_sink = open_sink(args.status_output)
        engine = TickEngine(poll_interval_ms=settings.poll_interval_ms)
        operator = ConsoleOperator() if mode == Mode.UNBOUNDED else None

        logger.info("Starting %s run of %s", mode.value, config.duration.format())
        orchestration = build_orchestration(
            config, engine, sink, status_sink, notifier=notifier, operator=operator
        )
        orchestration.run()
    except InvalidInput as exc:
        logger.error("Entrada inválida: %s", exc)
        return 2
    except SinkIOError as exc:
        logger.error("Erro ao escrever: %s", exc)
        return 1
    except AudioError as exc:
        logger.error("Erro de áudio: %s", exc)
        return 1
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
