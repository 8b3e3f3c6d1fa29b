import argparse
import logging
from typing import Iterable, List, Optional, Sequence

from ts_model_typer.config_validation import ToolConfigSchema, load_config
from ts_model_typer.declaration_gen import TemplateDeclarationGenerator
from ts_model_typer.domain.models import Transformer, TransformedType
from ts_model_typer.domain.naming import SymbolQualifier, class_reference
from ts_model_typer.enum_transformer import EnumTransformer
from ts_model_typer.exceptions import (
    DeclarationGenerationError,
    MalformedDeclarationError,
    ModelTyperError,
    SchemaIntrospectionError,
)
from ts_model_typer.introspection_django import (
    DjangoModelInspector,
    collect_cast_enums,
    discover_models,
    setup_django,
)
from ts_model_typer.transformer import ModelTransformer
from ts_model_typer.writer import render_declarations, write_declarations

from ts_model_typer.colored_logging import (
    setup_colored_logging,
    get_colored_logger,
    log_success,
    log_progress,
    log_highlight,
    log_section
)


logger = logging.getLogger(__name__)

# Failures local to one model; the on_error policy decides whether they abort the run
PER_MODEL_ERRORS = (MalformedDeclarationError, DeclarationGenerationError, SchemaIntrospectionError)


def build_transformers(config: ToolConfigSchema, qualifier: SymbolQualifier) -> List[Transformer]:
    """Transformers in dispatch order: models first, then enums."""
    inspector = DjangoModelInspector(casts_attribute=config.casts_attribute)
    generator = TemplateDeclarationGenerator(
        inspector,
        counts=config.counts,
        exists=config.exists,
        emit_constants=config.emit_constants,
    )
    return [
        ModelTransformer(inspector, generator, qualifier),
        EnumTransformer(),
    ]


def transform_classes(
    classes: Iterable[type],
    transformers: Sequence[Transformer],
    on_error: str = "abort",
) -> List[TransformedType]:
    """Run every class through the first transformer that accepts it."""
    results = []
    for source_class in classes:
        for transformer in transformers:
            try:
                transformed = transformer.transform(source_class, source_class.__name__)
            except PER_MODEL_ERRORS as e:
                if on_error != "skip":
                    raise
                logger.warning(f"Skipping '{class_reference(source_class)}': {e.message}")
                break
            if transformed is not None:
                logger.debug(f"Transformed '{class_reference(source_class)}' with {type(transformer).__name__}")
                results.append(transformed)
                break
        else:
            logger.debug(f"No transformer applies to '{class_reference(source_class)}'. Skipping.")
    return results


def run(config: ToolConfigSchema) -> List[TransformedType]:
    """Full pipeline: configure Django, transform models and enums, write the file."""
    log_progress(logger, "Configuring Django...")
    setup_django(config.django_settings_module)

    log_section(logger, "Model Discovery")
    model_classes = discover_models(config.include_apps, config.exclude_apps)
    enum_classes = collect_cast_enums(model_classes, config.casts_attribute)
    log_highlight(logger, f"Found {len(model_classes)} models and {len(enum_classes)} enums")

    log_section(logger, "Transformation")
    qualifier = SymbolQualifier(config.namespace_aliases)
    transformers = build_transformers(config, qualifier)
    log_progress(logger, "Transforming classes...")
    transformed = transform_classes(
        list(model_classes) + list(enum_classes), transformers, on_error=config.on_error
    )

    log_progress(logger, "Rendering declarations...")
    content = render_declarations(transformed, qualifier)
    write_declarations(config.output_file, content)
    log_success(logger, f"{len(transformed)} declarations written to {config.output_file}")
    return transformed


def main(argv: Optional[Sequence[str]] = None) -> int:
    # --- Argument Parsing ---
    parser = argparse.ArgumentParser(
        description="Generate TypeScript declarations from Django models."
    )
    parser.add_argument(
        "-c",
        "--config",
        help="Path to the YAML configuration file.",
    )
    parser.add_argument(
        "-o",
        "--output-file",
        dest="output_file",
        help="Path of the generated .d.ts file. Overrides config file setting.",
    )
    parser.add_argument(
        "--settings",
        dest="django_settings_module",
        help="Django settings module. Overrides config file and DJANGO_SETTINGS_MODULE.",
    )
    parser.add_argument(
        "--skip-errors",
        dest="on_error",
        action="store_const",
        const="skip",
        help="Skip models whose declaration cannot be transformed instead of aborting.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose DEBUG logging.",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output (useful for CI/CD environments).",
    )

    args = parser.parse_args(argv)

    # --- Logging Setup ---
    setup_colored_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        use_colors=not args.no_color,
    )
    cli_logger = get_colored_logger(__name__)
    if args.verbose:
        cli_logger.debug("Verbose mode enabled. DEBUG level logging activated.")

    # --- Main Execution Pipeline ---
    try:
        log_progress(cli_logger, "Loading configuration...")
        config = load_config(args.config, args)
        cli_logger.debug(f"Effective configuration loaded: {config}")

        run(config)
    except ModelTyperError as e:
        cli_logger.error(str(e), exc_info=args.verbose)
        return 1
    except Exception as e:
        cli_logger.error(
            f"An unexpected error occurred during generation: {e}", exc_info=True
        )
        return 1

    log_success(cli_logger, "Declaration generation completed successfully!")
    return 0


# --- Script Entry Point ---
if __name__ == "__main__":
    raise SystemExit(main())
