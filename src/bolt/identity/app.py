from click import option, Context, pass_context, argument, group, prompt, File, UsageError, ClickException, Path as ClickPath
from contextlib import contextmanager
from loguru import logger
from typing import Generator, BinaryIO, cast
from types import SimpleNamespace
from pathlib import Path

from .types import KeyPair, Passphrase, Nickname, IdentityError
from .click import NICKNAME
from .config import Config, load_config, find_config
from .passphrase import find_passphrase
from .key_pair import (
    generate_key_pair,
    load_key_pair,
    save_secret_key,
    armor_public_key,
    unlock_key_pair,
    dump_key_pair_description,
)
from .signature import sign_content


@contextmanager
def _reporting_errors() -> Generator[None, None, None]:
    try:
        yield
    except IdentityError as e:
        raise ClickException(str(e)) from e


def _resolve_passphrase(context: Context, *, confirm: bool = False) -> Passphrase:
    if (passphrase := context.obj.passphrase) is not None:
        return cast(Passphrase, passphrase)

    if (passphrase := find_passphrase()) is not None:
        return passphrase

    return cast(Passphrase, prompt("Passphrase", hide_input=True, confirmation_prompt=confirm))


def _resolve_key_file_path(context: Context) -> Path:
    config = cast(Config, context.obj.config)
    key_file_path = context.obj.key_file_path or config.key_file_path
    if key_file_path is None:
        raise UsageError("No key file given, use --key-file or set 'key_file' in the configuration.")
    return cast(Path, key_file_path)


def _load_key_pair(context: Context, passphrase: Passphrase) -> KeyPair:
    key_file_path = _resolve_key_file_path(context)
    with _reporting_errors():
        return load_key_pair(key_file_path, passphrase)


@group()
@option(
    "--config",
    "-c",
    "config_file_path",
    type=ClickPath(exists=True, dir_okay=False, path_type=Path),
    required=False,
)
@option(
    "--key-file",
    "-k",
    "key_file_path",
    type=Path,
    required=False,
)
@option(
    "--passphrase",
    "passphrase",
    type=str,
    required=False,
)
@pass_context
def app(
    context: Context,
    config_file_path: Path | None,
    key_file_path: Path | None,
    passphrase: Passphrase | None,
) -> None:
    logger.debug("App started! ")
    context.obj = SimpleNamespace()

    with _reporting_errors():
        if config_file_path is not None:
            config = load_config(config_file_path)
        else:
            config = find_config() or Config()

    context.obj.config = config
    context.obj.key_file_path = key_file_path
    context.obj.passphrase = passphrase



@app.command()
@option(
    "--nickname",
    "-n",
    "nickname",
    type=NICKNAME,
    required=False,
)
@option(
    "--force",
    "-f",
    "force",
    is_flag=True,
    default=False,
)
@pass_context
def generate(context: Context, nickname: Nickname | None, force: bool) -> None:
    config = cast(Config, context.obj.config)
    key_file_path = _resolve_key_file_path(context)
    if key_file_path.exists() and not force:
        raise ClickException(f"Key file {str(key_file_path)!r} already exists, use --force to overwrite it.")

    nickname = nickname or config.nickname or cast(Nickname, prompt("Nickname", type=NICKNAME))
    passphrase = _resolve_passphrase(context, confirm=True)

    with _reporting_errors():
        key_pair = generate_key_pair(nickname, passphrase)
        save_secret_key(key_pair, key_file_path)

    print(armor_public_key(key_pair).rstrip("\n"))



@app.command()
@pass_context
def export(context: Context) -> None:
    key_pair = _load_key_pair(context, _resolve_passphrase(context))
    print(armor_public_key(key_pair).rstrip("\n"))



@app.command()
@argument("file", type=File("rb"), required=True)
@pass_context
def sign(context: Context, file: BinaryIO) -> None:
    passphrase = _resolve_passphrase(context)
    key_pair = _load_key_pair(context, passphrase)
    content = file.read()

    with _reporting_errors():
        with unlock_key_pair(key_pair, passphrase):
            signature = sign_content(key_pair, content)

    print(signature.rstrip("\n"))



@app.command()
@pass_context
def info(context: Context) -> None:
    key_pair = _load_key_pair(context, _resolve_passphrase(context))
    print(dump_key_pair_description(key_pair), end="")
