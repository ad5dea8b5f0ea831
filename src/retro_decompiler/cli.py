# src/retro_decompiler/cli.py
"""
コマンドラインからのデコード。

バイトコードのテキストファイル（または標準入力）を読み込み、
逆アセンブル表をテキストで出力します。
"""
import argparse
import sys
from typing import List, Optional

from retro_decompiler.config.loader import ConfigLoader
from retro_decompiler.config.models import SessionConfig
from retro_decompiler.decoder.table import TableDecoder
from retro_decompiler.diagnostics.output import Output
from retro_decompiler.render.text import render_text
from retro_decompiler.session.page import DecompilerSession


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description='Render raw 16-bit operation codes as a disassembly view')
    parser.add_argument('input', nargs='?',
                        help='Bytecode file, one hex operation code per line (default: stdin, or the config bytecode)')
    parser.add_argument('-c', '--config', help='Session config (YAML) with first address, bytecode and decoder rules')
    parser.add_argument('-a', '--address', help='First address (hex), overrides the config value')
    parser.add_argument('-q', '--quiet', action='store_true', help='Do not print diagnostics')

    args = parser.parse_args(argv)

    try:
        config = ConfigLoader().load_from_file(args.config) if args.config else SessionConfig()
        decoder = TableDecoder.from_config(config.decoder)
    except (OSError, ValueError) as e:
        print(f"Error: Failed to load session config: {e}", file=sys.stderr)
        return 2

    if args.input:
        with open(args.input, 'r', encoding="utf-8") as f:
            bytecode = f.read()
    elif args.config:
        bytecode = config.bytecode
    else:
        bytecode = sys.stdin.read()

    first_address = args.address if args.address is not None else config.first_address

    output = Output(echo=not args.quiet, stream=sys.stderr)
    session = DecompilerSession.open(first_address, bytecode, output)
    if session is None:
        return 1

    view = session.decompile(decoder)
    for line in render_text(view):
        print(line)
    return 0


if __name__ == '__main__':
    sys.exit(main())
