"""Main CLI entry point for gemini-envelope.

Offline tooling around the envelope layer:
    gemini-envelope schema <module:attr> [--format json|openapi]
    gemini-envelope request <prompt> [--type <module:attr>] [options]
    gemini-envelope decode <file> [--type <module:attr>] [--format text|json]
"""

import importlib
import json
import logging
import sys
from typing import Any

import click
from pydantic_core import to_jsonable_python

from .. import __version__
from ..codec import dump_request, load_response
from ..config import load_generation_options
from ..dto import (
    GenerateContentRequest,
    GenerateContentResponse,
    GenerationConfig,
    PlainText,
    SchemaDescriptor,
    SchemaFormat,
    is_plain_text,
)
from ..exceptions import GeminiError

_SCHEMA_FORMATS = {"json": SchemaFormat.JSON_SCHEMA, "openapi": SchemaFormat.OPENAPI}


class TypePath(click.ParamType):
    """A ``module:attr`` reference to a Python type, e.g. ``myapp.models:Person``."""

    name = "module:attr"

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> Any:
        if not isinstance(value, str):
            return value

        module_name, sep, attr = value.partition(":")
        if not sep or not module_name or not attr:
            self.fail(f"{value!r} is not in module:attr form", param, ctx)

        try:
            obj: Any = importlib.import_module(module_name)
        except ImportError as e:
            self.fail(f"cannot import {module_name!r}: {e}", param, ctx)

        for name in attr.split("."):
            try:
                obj = getattr(obj, name)
            except AttributeError:
                self.fail(f"{module_name!r} has no attribute {attr!r}", param, ctx)
        return obj


TYPE_PATH = TypePath()


@click.group()
@click.version_option(version=__version__, prog_name="gemini-envelope")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """gemini-envelope - typed request/response envelopes for Gemini.

    \b
    Inspect what would go over the wire without calling the API:
        gemini-envelope schema myapp.models:Person --format openapi
        gemini-envelope request "Describe Alice" --type myapp.models:Person
        gemini-envelope decode response.json --type myapp.models:Person
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


# =============================================================================
# Schema Command
# =============================================================================


@cli.command()
@click.argument("target", type=TYPE_PATH)
@click.option(
    "--format", "-f", "schema_format", type=click.Choice(list(_SCHEMA_FORMATS)), default="json"
)
def schema(target: Any, schema_format: str) -> None:
    """Print the response schema derived for a type.

    \b
    Examples:
        gemini-envelope schema myapp.models:Person
        gemini-envelope schema myapp.models:Person --format openapi
    """
    try:
        descriptor = SchemaDescriptor.from_type(target, _SCHEMA_FORMATS[schema_format])
    except GeminiError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(json.dumps(descriptor.document, indent=2))


# =============================================================================
# Request Command
# =============================================================================


@cli.command()
@click.argument("prompt")
@click.option("--type", "-t", "response_type", type=TYPE_PATH, help="Expected response type")
@click.option(
    "--schema-format",
    type=click.Choice(list(_SCHEMA_FORMATS)),
    default="json",
    help="Schema format attached for --type",
)
@click.option("--system", "-s", help="System instruction")
@click.option("--temperature", type=float, help="Sampling temperature")
@click.option("--max-output-tokens", type=int, help="Maximum output tokens")
@click.option(
    "--options-file",
    type=click.Path(dir_okay=False),
    help="YAML file with generation options",
)
def request(
    prompt: str,
    response_type: Any,
    schema_format: str,
    system: str | None,
    temperature: float | None,
    max_output_tokens: int | None,
    options_file: str | None,
) -> None:
    """Print the request body that would be sent for a prompt.

    \b
    Examples:
        gemini-envelope request "Tell me a story"
        gemini-envelope request "Describe Alice" --type myapp.models:Person
        gemini-envelope request "Hi" --options-file generation.yaml
    """
    builder = GenerationConfig.builder()
    try:
        if options_file:
            builder = builder.options(load_generation_options(options_file))
        if temperature is not None:
            builder = builder.temperature(temperature)
        if max_output_tokens is not None:
            builder = builder.max_output_tokens(max_output_tokens)
        if response_type is not None:
            if _SCHEMA_FORMATS[schema_format] == SchemaFormat.OPENAPI:
                builder = builder.response_schema(response_type)
            else:
                builder = builder.response_json_schema(response_type)

        config = builder.build()
        # A config with nothing set is left off the body.
        prompt_request = GenerateContentRequest.from_prompt(
            prompt, config=config if config.to_wire() else None, system=system
        )
        body = dump_request(prompt_request)
    except (GeminiError, FileNotFoundError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(json.dumps(json.loads(body), indent=2))


# =============================================================================
# Decode Command
# =============================================================================


@cli.command()
@click.argument("source", type=click.File("rb"))
@click.option("--type", "-t", "response_type", type=TYPE_PATH, help="Expected response type")
@click.option(
    "--format", "-f", "output_format", type=click.Choice(["text", "json"]), default="text"
)
def decode(source: Any, response_type: Any, output_format: str) -> None:
    """Decode a saved generateContent response body.

    Use "-" to read from stdin.

    \b
    Examples:
        gemini-envelope decode response.json
        gemini-envelope decode response.json --type myapp.models:Person --format json
    """
    response_type = PlainText if response_type is None else response_type
    try:
        response = load_response(source.read(), response_type)
    except GeminiError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if output_format == "json":
        click.echo(json.dumps(_decoded_summary(response), indent=2))
        return

    if not response.candidates:
        click.echo("No candidates.")
        if response.prompt_feedback and response.prompt_feedback.block_reason:
            click.echo(f"  Blocked: {response.prompt_feedback.block_reason}")
        return

    plain = is_plain_text(response_type)
    for index, candidate in enumerate(response.candidates):
        click.echo(f"Candidate {index} (finish reason: {candidate.finish_reason or '-'})")
        for text in candidate.content.texts():
            if plain:
                click.echo(text)
            else:
                click.echo(json.dumps(to_jsonable_python(text), indent=2))

    usage = response.usage_metadata
    if usage:
        click.echo(
            f"Tokens: prompt={usage.prompt_token_count}, "
            f"candidates={usage.candidates_token_count}, total={usage.total_token_count}"
        )


def _decoded_summary(response: GenerateContentResponse[Any]) -> dict[str, Any]:
    summary: dict[str, Any] = {
        "candidates": [
            {
                "finishReason": candidate.finish_reason,
                "texts": to_jsonable_python(candidate.content.texts()),
            }
            for candidate in response.candidates
        ]
    }
    if response.usage_metadata:
        summary["usageMetadata"] = response.usage_metadata.to_wire()
    return summary


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
