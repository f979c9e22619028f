"""Rule tables mapping source text to pages of the WHO guide."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

from chatchw.config import Settings, settings as default_settings
from chatchw.models.source import PhraseRule, ResolverConfig, TermClause, TopicRule

logger = logging.getLogger(__name__)

# Manually verified against who-guide.pdf. First hit wins.
DEFAULT_PHRASES: List[PhraseRule] = [
    PhraseRule(phrase="ts for certain patients; and programmes/systems might bear", page=34),
    PhraseRule(phrase="for certain patients; and programmes/systems might bear", page=34),
    PhraseRule(phrase="certain patients; and programmes/systems might bear some cost", page=34),
    PhraseRule(phrase="Evidence-to-decision", page=34),
    PhraseRule(phrase="GDG was unable to quantify", page=34),
    PhraseRule(phrase="Equity would probably be reduced", page=34),
    PhraseRule(phrase="cost with policy changes", page=34),
    PhraseRule(phrase="reduced equity", page=34),
    PhraseRule(phrase="Evidence to decision", page=34),
    PhraseRule(phrase="TICAL Stool output (g/kg) 65 randomized trialsserious", page=12),
    PhraseRule(phrase="diarrhoea (regardless of etiology), WHO suggests against", page=15),
    PhraseRule(phrase="arrhoea PICO 1 Population children up to 10 years of age", page=15),
    PhraseRule(phrase="WHO suggests against the use of antibiotics", page=15),
    PhraseRule(phrase="arrhoea (regardless of etiology)", page=15),
    PhraseRule(phrase="ectness Inc", page=18),
    PhraseRule(phrase="with worm", page=22),
    PhraseRule(phrase="blood in", page=10),
    PhraseRule(phrase="treatment", page=18),
    PhraseRule(phrase="antibiotic", page=15),
    PhraseRule(phrase="pneumonia", page=8),
    PhraseRule(phrase="management of pneumonia", page=8),
    PhraseRule(phrase="diarrhoea in children", page=9),
    PhraseRule(phrase="conditional recommendation", page=15),
]

DIARRHOEA_TERMS = ["diarrhea", "arrhoea"]

# Order matters: ambiguous sources resolve to the first rule that holds.
DEFAULT_TOPICS: List[TopicRule] = [
    TopicRule(
        name="diarrhoea-antibiotics",
        page=15,
        clauses=[TermClause(all_of=[DIARRHOEA_TERMS, ["antibiotic", "suggest against"]])],
    ),
    TopicRule(
        name="diarrhoea-treatment",
        page=18,
        clauses=[TermClause(all_of=[DIARRHOEA_TERMS, ["treatment", "management"]])],
    ),
    TopicRule(
        name="diarrhoea-general",
        page=15,
        clauses=[TermClause(all_of=[DIARRHOEA_TERMS])],
    ),
    TopicRule(
        name="evidence-to-decision",
        page=34,
        clauses=[TermClause(all_of=[["evidence"], ["decision", "framework"]])],
    ),
    TopicRule(
        name="equity-cost",
        page=34,
        clauses=[
            TermClause(all_of=[["equity"]]),
            TermClause(all_of=[["cost"], ["policy"]]),
        ],
    ),
    TopicRule(
        name="stool-output",
        page=12,
        clauses=[TermClause(all_of=[["stool", "output"]])],
    ),
]


def _document_fields(config_settings: Settings) -> dict:
    return {
        "default_document": config_settings.default_document,
        "base_path": config_settings.pdf_base_path,
        "document_suffix": config_settings.document_suffix,
    }


def build_default_config(config_settings: Optional[Settings] = None) -> ResolverConfig:
    """Built-in WHO guide tables combined with the configured document settings."""
    config_settings = config_settings or default_settings
    return ResolverConfig(
        **_document_fields(config_settings),
        phrases=[rule.model_copy() for rule in DEFAULT_PHRASES],
        topics=[rule.model_copy(deep=True) for rule in DEFAULT_TOPICS],
    )


def load_config(path: Path, config_settings: Optional[Settings] = None) -> ResolverConfig:
    """Read rule tables from a JSON file.

    Keys missing from the file (``default_document``, ``base_path``,
    ``document_suffix``) come from the settings.
    """
    config_settings = config_settings or default_settings
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Resolver rules file {path} does not exist.")
    with path.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    if isinstance(payload, dict):
        payload = {**_document_fields(config_settings), **payload}
    config = ResolverConfig.model_validate(payload)
    logger.info(
        "Loaded %s phrase rules and %s topic rules from %s",
        len(config.phrases),
        len(config.topics),
        path,
    )
    return config


def get_resolver_config(config_settings: Optional[Settings] = None) -> ResolverConfig:
    config_settings = config_settings or default_settings
    rules_path = config_settings.resolver_rules_path_obj
    if rules_path is None:
        return build_default_config(config_settings)
    return load_config(rules_path, config_settings)


def export_config(config: ResolverConfig, output_path: Path) -> None:
    """Persist a rule configuration as JSON."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as handle:
        handle.write(config.model_dump_json(indent=2) + "\n")
    logger.info("Wrote resolver rules to %s", output_path)


def main() -> None:
    """CLI entry point: dump the built-in tables as an editable starting point."""
    logging.basicConfig(level=default_settings.log_level)
    output = default_settings.resolver_rules_path_obj
    if output is None:
        logger.error("RESOLVER_RULES_PATH is not set; nowhere to write the rules.")
        return
    export_config(build_default_config(), output)


if __name__ == "__main__":
    main()
