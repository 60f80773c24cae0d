"""The Command Line Interface for the utility, including Interactive elements.

A hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface) that asks interactively for
whatever the command line left out, including the subcommand itself.

Typical usage example:

    rsadigest
    OR
    python -m rsadigest -n keygen --keysize 1024 -p key.pub -P key.priv
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import logging
import pathlib
import sys
import typing

import colorlog

import rsadigest
from rsadigest import digest

logger = logging.getLogger(__name__)


class HelpData(typing.NamedTuple):
    description: str
    format: typing.Type = str
    choices: list[str] | None = None
    default: typing.Any = None
    advanced: bool = False


help_dict: dict[str, HelpData] = {
    "subcommand":
        HelpData(
            description="The available subcommands in RSA Digest.",
            choices=["keygen", "encrypt", "decrypt", "dump", "digest"],
        ),
    "keygen":
        HelpData("Key generation utility."),
    "encrypt":
        HelpData("Byte-wise encryption utility."),
    "decrypt":
        HelpData("Byte-wise decryption utility."),
    "dump":
        HelpData("Print the factors of a key file."),
    "digest":
        HelpData("SHA-512 digest of a file."),
    "public_key":
        HelpData(
            description="Location of the public key file.",
            format=pathlib.Path,
        ),
    "private_key":
        HelpData(
            description="Location of the private key file.",
            format=pathlib.Path,
        ),
    "key":
        HelpData(
            description="Location of the key file to use, public or private.",
            format=pathlib.Path,
        ),
    "input":
        HelpData(
            description="Location of the input file.",
            format=pathlib.Path,
        ),
    "output":
        HelpData(
            description="Location of the output file.",
            format=pathlib.Path,
        ),
    "keysize":
        HelpData(
            description="Key size (in bits). Must be even.",
            format=int,
            default=2048,
        ),
    "max_attempts":
        HelpData(
            description="Attempts allowed for each retry loop of the key generation.",
            format=int,
            default=100000,
            advanced=True,
        ),
    "overwrite":
        HelpData(
            description="Overwrite specified destination files if they exist?",
            choices=["Y", "N"],
            default="N",
        )
}

needs = {
    "keygen": ("public_key", "private_key", "keysize", "max_attempts"),
    "encrypt": ("key", "input", "output"),
    "decrypt": ("key", "input", "output"),
    "dump": ("key",),
    "digest": ("input",),
}

pubkey = argparse.ArgumentParser(add_help=False)
pubkey.add_argument("--public_key", "-p", type=help_dict["public_key"].format, help=help_dict["public_key"].description)
privkey = argparse.ArgumentParser(add_help=False)
privkey.add_argument("--private_key",
                     "-P",
                     type=help_dict["private_key"].format,
                     help=help_dict["private_key"].description)
anykey = argparse.ArgumentParser(add_help=False)
anykey.add_argument("--key", "-k", type=help_dict["key"].format, help=help_dict["key"].description)
infile = argparse.ArgumentParser(add_help=False)
infile.add_argument("--input", "-i", type=help_dict["input"].format, help=help_dict["input"].description)
outfile = argparse.ArgumentParser(add_help=False)
outfile.add_argument("--output", "-O", type=help_dict["output"].format, help=help_dict["output"].description)
corep = argparse.ArgumentParser(prog="rsadigest")
corep.add_argument("--version", "-v", action="version", version=f"%(prog)s {rsadigest.__version__}")
corep.add_argument("--non-interactive", "-n", action="store_true", help="Enable non-interactive mode")
corep.add_argument("--advanced", "-a", action="store_true", help="Enable advanced mode, for interactive mode")
corep.add_argument("--verbose", "-V", action="store_true", help="Log progress information")
commands = corep.add_subparsers(dest="subcommand", title="Subcommands")

keygen = commands.add_parser("keygen", parents=[privkey, pubkey], help=help_dict["keygen"].description)
keygen.add_argument("--keysize", type=help_dict["keysize"].format, help=help_dict["keysize"].description)
keygen.add_argument("--max_attempts",
                    type=help_dict["max_attempts"].format,
                    help=help_dict["max_attempts"].description)
keygen.add_argument("--full_key", "-f", type=pathlib.Path, help="Also store all key factors in this file.")
keygen.add_argument("--overwrite", "-o", action="store_const", const="Y", help=help_dict["overwrite"].description)

encrypt = commands.add_parser("encrypt", parents=[anykey, infile, outfile], help=help_dict["encrypt"].description)
decrypt = commands.add_parser("decrypt", parents=[anykey, infile, outfile], help=help_dict["decrypt"].description)
dump = commands.add_parser("dump", parents=[anykey], help=help_dict["dump"].description)
digestp = commands.add_parser("digest", parents=[infile], help=help_dict["digest"].description)


def setup_logging(verbose: bool) -> None:
    """Colored logging to stderr, with warnings routed through it."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        colorlog.ColoredFormatter(
            "%(log_color)s%(levelname)-8s%(reset)s [%(name)s] %(message)s",
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "bold_red",
            },
        ))
    logging.basicConfig(level=logging.INFO if verbose else logging.WARNING, handlers=[handler], force=True)
    logging.captureWarnings(True)


def checkmodes(arg: str, mode: tuple[bool, bool]):
    helper_data = help_dict[arg]
    if (mode[0] or (helper_data.advanced and not mode[1])) and helper_data.default is not None:
        return helper_data.default
    if mode[0]:
        raise IOError(f"Argument {arg} is missing and non-interactive mode is active.")
    return helper_data


def choice_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = print):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    choices = helper_data.choices
    vald = set(choices)
    for choice in choices:
        defstring = " (Default)" if choice == helper_data.default else ""
        if help_dict.get(choice, None):
            prntr(f"{choice} - {help_dict[choice].description}" + defstring)
        else:
            prntr(f"{choice}" + defstring)
    if helper_data.default is not None:
        prntr("To accept default just click enter. Otherwise specify value.")
    while True:
        ch = input(f"{arg}: ")
        if ch in vald:
            return ch
        if not ch and helper_data.default is not None:
            return helper_data.default
        prntr("Please select an option from the list.")


def input_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = print):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    if helper_data.default is not None:
        prntr(f"Default value: {helper_data.default}")
        prntr("To accept default just click enter. Otherwise specify value.")
    cls = helper_data.format
    while True:
        ch = input(f"{arg}: ")
        if not ch and helper_data.default is not None:
            return helper_data.default
        if ch == "":
            prntr("Please provide a value.")
            continue
        try:
            return cls(ch)
        except ValueError:
            prntr(f"We could not convert your value to {cls.__name__}.")


def read_bytes(file: pathlib.Path) -> typing.Iterator[int]:
    """Yield the bytes of `file` one by one, reading in chunks."""
    with open(file, "rb") as f:
        for chunk in iter(lambda: f.read(digest.CHUNK_SIZE), b""):
            yield from chunk


def load_projection(file: pathlib.Path) -> rsadigest.RSAKey:
    key = rsadigest.import_any(file)
    if isinstance(key, rsadigest.RSAFullKey):
        raise IOError(f"{file} holds a full key. Use its public or private projection.")
    return key


def main(argv: list[str] | None = None):
    """Core Hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface)"""
    args = corep.parse_args(argv)
    pstatus = (args.non_interactive, args.advanced)
    setup_logging(args.verbose)

    def pspr(text: str):
        """Print only if not in non-interactive mode."""
        if not pstatus[0]:
            print(text)

    pspr("Welcome to RSA Digest!\n")
    if not args.subcommand:
        args.subcommand = choice_handler("subcommand", pstatus)
    for reqs in needs[args.subcommand]:
        if getattr(args, reqs, None) is None:
            if help_dict[reqs].choices is not None:
                res = choice_handler(reqs, pstatus)
            else:
                res = input_handler(reqs, pstatus)
            setattr(args, reqs, res)
        else:
            pspr(f"{reqs}: {getattr(args, reqs)}")
    pspr("\nInput Complete! Executing...")
    match args.subcommand:
        case "keygen":
            targets = [args.private_key, args.public_key] + ([args.full_key] if args.full_key else [])
            if any(target.exists() for target in targets):
                rs = getattr(args, "overwrite", None)
                if rs is None:
                    rs = choice_handler("overwrite", pstatus, pspr)
                if rs == "N":
                    print("Destination key file already exists!")
                    return
            fk = rsadigest.RSAFullKey.generate(int(args.keysize), max_attempts=int(args.max_attempts))
            fk.to_public().export(args.public_key)
            fk.to_private().export(args.private_key)
            if args.full_key:
                fk.export(args.full_key)
            logger.info("Wrote key files %s and %s.", args.public_key, args.private_key)
            pspr(fk.dump())
            pspr("Key pair generated!")
        case "encrypt":
            key = load_projection(args.key)
            with open(args.output, "w", encoding="ascii") as out:
                out.writelines(key.encrypt_stream(read_bytes(args.input)))
            pspr("Encryption complete!")
        case "decrypt":
            key = load_projection(args.key)
            with open(args.input, "r", encoding="ascii", errors="replace") as src, open(args.output, "wb") as out:
                buf = bytearray()
                for value in key.decrypt_stream(src):
                    buf.append(value)
                    if len(buf) >= digest.CHUNK_SIZE:
                        out.write(buf)
                        buf.clear()
                out.write(buf)
            pspr("Decryption complete!")
        case "dump":
            print(rsadigest.import_any(args.key).dump(), end="")
        case "digest":
            print(digest.sha512_file(args.input))
    pspr("Thank you for using RSA Digest!")
    pspr("Goodbye!")


if __name__ == "__main__":
    main()
