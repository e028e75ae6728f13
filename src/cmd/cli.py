from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Sequence

# 直接スクリプトとして実行された場合でも src パッケージを解決できるようにする
if __package__ in {None, ""}:  # python src/cmd/cli.py 等の実行形態に対応
    project_root = Path(__file__).resolve().parents[2]
    if str(project_root) not in sys.path:
        sys.path.append(str(project_root))

from src.config.logging import setup_logging
from src.lib.corrector import CorrectionPipeline, CorrectionResult, correct_document, correct_selection
from src.lib.editor import TextBuffer
from src.lib.settings import JsonSettingsStore, Settings, SettingsManager

STDIN_PATH = "-"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocumentCorrection:
    source: str
    text: str
    result: CorrectionResult | None
    written: bool = False


@dataclass(frozen=True)
class SettingsCommandResult:
    path: Path
    settings: Settings


CommandResult = DocumentCorrection | SettingsCommandResult
CommandHandler = Callable[[argparse.Namespace], CommandResult]
Validator = Callable[[argparse.Namespace], None]


@dataclass(frozen=True)
class SubcommandSpec:
    name: str
    help: str
    configure: Callable[[argparse.ArgumentParser], None]
    handler: CommandHandler
    use_shared_parent: bool = False
    description: str | None = None
    aliases: tuple[str, ...] = ()
    validators: tuple[Validator, ...] = ()


def _build_shared_parent_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument(
        "path",
        nargs="?",
        default=STDIN_PATH,
        help="補正対象のテキストファイル（- または省略時は標準入力）",
    )
    parser.add_argument(
        "--no-remote",
        action="store_true",
        help="リモート校正サービスを使わず quick fix のみ適用する",
    )
    parser.add_argument("--language", default=None, help="言語タグ（例: en-US, de-DE）")
    parser.add_argument("--service-url", default=None, help="LanguageTool 互換 API の URL")
    parser.add_argument("--timeout", type=float, default=None, help="リモート呼び出しのタイムアウト秒数")
    parser.add_argument(
        "--in-place",
        action="store_true",
        help="結果を標準出力ではなく入力ファイルへ書き戻す",
    )
    return parser


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--settings",
        default=None,
        help="設定ファイルのパス（既定: $AUTOCORRECT_SETTINGS_PATH または ~/.config/autocorrect/settings.json）",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="ログレベル (DEBUG/INFO/WARNING/ERROR)",
    )


def _configure_document_parser(parser: argparse.ArgumentParser) -> None:
    _add_common_options(parser)


def _configure_selection_parser(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--start", type=int, required=True, help="選択範囲の開始位置（0 始まりの文字インデックス）")
    parser.add_argument("--end", type=int, required=True, help="選択範囲の終了位置（開区間）")
    _add_common_options(parser)


def _configure_settings_parser(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("action", choices=["show", "set"], help="show: 表示 / set: 1 項目を変更して保存")
    parser.add_argument("key", nargs="?", default=None, help="変更する設定項目名")
    parser.add_argument("value", nargs="?", default=None, help="設定する値")
    _add_common_options(parser)


def _validate_in_place(args: argparse.Namespace) -> None:
    if getattr(args, "in_place", False) and args.path == STDIN_PATH:
        raise ValueError("--in-place は標準入力とは併用できません。")


def _validate_selection_range(args: argparse.Namespace) -> None:
    if args.start < 0 or args.end < args.start:
        raise ValueError(f"選択範囲が不正です: start={args.start}, end={args.end}")


def _validate_settings_args(args: argparse.Namespace) -> None:
    if args.action == "set" and (args.key is None or args.value is None):
        raise ValueError("settings set には KEY と VALUE を指定してください。")


def _load_manager(args: argparse.Namespace) -> SettingsManager:
    return SettingsManager.load(JsonSettingsStore(getattr(args, "settings", None)))


def _resolve_settings(args: argparse.Namespace) -> Settings:
    """保存済み設定にコマンドライン指定を重ねる（この実行のみ有効、保存はしない）。"""

    base = _load_manager(args).settings
    overrides: dict[str, Any] = {}
    if getattr(args, "no_remote", False):
        overrides["use_remote_correction"] = False
    if getattr(args, "language", None):
        overrides["language"] = args.language
    if getattr(args, "service_url", None):
        overrides["remote_service_url"] = args.service_url
    if getattr(args, "timeout", None) is not None:
        overrides["timeout_seconds"] = args.timeout
    if not overrides:
        return base
    return Settings.model_validate({**base.model_dump(), **overrides})


def _read_input(path: str) -> str:
    if path == STDIN_PATH:
        return sys.stdin.read()
    try:
        return Path(path).read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise RuntimeError(f"入力ファイルが見つかりません: {path}") from exc


def _write_back(args: argparse.Namespace, text: str) -> bool:
    if not args.in_place:
        return False
    Path(args.path).write_text(text, encoding="utf-8")
    return True


def _handle_document_command(args: argparse.Namespace) -> CommandResult:
    settings = _resolve_settings(args)
    buffer = TextBuffer(_read_input(args.path))
    result = correct_document(buffer, settings=settings, pipeline=CorrectionPipeline(settings=settings))
    written = result is not None and _write_back(args, buffer.text)
    return DocumentCorrection(source=args.path, text=buffer.text, result=result, written=written)


def _handle_selection_command(args: argparse.Namespace) -> CommandResult:
    settings = _resolve_settings(args)
    text = _read_input(args.path)
    if args.end > len(text):
        raise ValueError(f"選択範囲が文書長を超えています: end={args.end}, length={len(text)}")
    buffer = TextBuffer(text, selection=(args.start, args.end))
    result = correct_selection(buffer, settings=settings, pipeline=CorrectionPipeline(settings=settings))
    written = result is not None and _write_back(args, buffer.text)
    return DocumentCorrection(source=args.path, text=buffer.text, result=result, written=written)


def _handle_settings_command(args: argparse.Namespace) -> CommandResult:
    store = JsonSettingsStore(args.settings)
    manager = SettingsManager.load(store)
    if args.action == "set":
        manager.update(**{args.key: args.value})
    return SettingsCommandResult(path=store.path, settings=manager.settings)


_SUBCOMMAND_SPECS: tuple[SubcommandSpec, ...] = (
    SubcommandSpec(
        name="document",
        help="文書全体を補正する",
        configure=_configure_document_parser,
        handler=_handle_document_command,
        use_shared_parent=True,
        validators=(_validate_in_place,),
    ),
    SubcommandSpec(
        name="selection",
        help="指定した文字範囲だけを補正する",
        configure=_configure_selection_parser,
        handler=_handle_selection_command,
        use_shared_parent=True,
        validators=(_validate_in_place, _validate_selection_range),
    ),
    SubcommandSpec(
        name="settings",
        help="保存済み設定の表示・変更",
        configure=_configure_settings_parser,
        handler=_handle_settings_command,
        validators=(_validate_settings_args,),
    ),
)

_SUBCOMMAND_MAP: dict[str, SubcommandSpec] = {}
for spec in _SUBCOMMAND_SPECS:
    _SUBCOMMAND_MAP[spec.name] = spec
    for alias in spec.aliases:
        _SUBCOMMAND_MAP[alias] = spec


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """CLI引数を定義して解析する。"""

    if argv is None:
        argv = sys.argv[1:]

    parser = argparse.ArgumentParser(description="quick fix と LanguageTool によるテキスト自動校正CLI")
    subparsers = parser.add_subparsers(dest="command")
    shared_parent = _build_shared_parent_parser()

    for spec in _SUBCOMMAND_SPECS:
        parents = [shared_parent] if spec.use_shared_parent else []
        subparser = subparsers.add_parser(
            spec.name,
            parents=parents,
            help=spec.help,
            description=spec.description or spec.help,
            aliases=list(spec.aliases),
        )
        spec.configure(subparser)

    subparsers.required = False
    parser.set_defaults(command="document")
    known_commands = set(_SUBCOMMAND_MAP.keys())
    if not argv or argv[0] not in known_commands:
        argv = ["document", *argv]
    return parser.parse_args(argv)


def run_cli(args: argparse.Namespace) -> CommandResult:
    """コマンド引数を受け取り、補正処理を実行する。"""

    setup_logging(args.log_level)
    command = args.command or "document"
    spec = _SUBCOMMAND_MAP.get(command)
    if spec is None:
        raise RuntimeError(f"未対応のコマンドです: {command}")
    for validator in spec.validators:
        validator(args)
    return spec.handler(args)


def main(argv: Sequence[str] | None = None) -> None:
    """エントリーポイント。実行結果を標準出力へ流す。"""

    args = parse_args(argv)
    try:
        result = run_cli(args)
    except Exception as exc:  # noqa: BLE001 - CLIからはエラーをそのまま通知する
        if args.command == "settings":
            raise SystemExit(f"設定の操作に失敗しました: {exc}") from exc
        raise SystemExit(f"補正に失敗しました: {exc}") from exc

    if isinstance(result, SettingsCommandResult):
        print(json.dumps(result.settings.model_dump(), ensure_ascii=False, indent=2))
        return

    if result.written:
        print(f"補正結果を書き戻しました: {result.source}", file=sys.stderr)
        return
    if result.result is not None and result.result.remote_error:
        print(f"警告: リモート補正を適用できませんでした: {result.result.remote_error}", file=sys.stderr)
    sys.stdout.write(result.text)
    sys.stdout.flush()


if __name__ == "__main__":  # pragma: no cover
    main()
