"""Built-in search presets.

The registry is built once at import time from the constant table below and
exposed read-only; nothing mutates it afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

_PRESET_MIN_SCORE = 50
_PRESET_MAX_AGE_DAYS = 180


@dataclass(frozen=True, slots=True)
class SearchPreset:
    name: str
    description: str
    keywords: tuple[str, ...]
    query: str
    group: str
    min_score: int = _PRESET_MIN_SCORE
    max_age_days: int = _PRESET_MAX_AGE_DAYS


PRESET_GROUPS: tuple[str, ...] = (
    "LLM & NLP",
    "Computer Vision",
    "Machine Learning",
    "Safety & Alignment",
    "Data & Training",
)

_PRESET_TABLE: tuple[SearchPreset, ...] = (
    # LLM & NLP
    SearchPreset(
        name="llm-reasoning",
        description="LLM reasoning and chain-of-thought",
        keywords=("large language model", "reasoning", "chain of thought", "CoT"),
        query="large language model reasoning chain of thought",
        group="LLM & NLP",
    ),
    SearchPreset(
        name="llm-agent",
        description="LLM-based agents and tool use",
        keywords=("large language model", "agent", "tool use", "planning"),
        query="large language model agent tool use planning",
        group="LLM & NLP",
    ),
    SearchPreset(
        name="llm-eval",
        description="LLM evaluation and benchmarks",
        keywords=("large language model", "evaluation", "benchmark", "assessment"),
        query="large language model evaluation benchmark",
        group="LLM & NLP",
    ),
    SearchPreset(
        name="rag",
        description="Retrieval-Augmented Generation",
        keywords=("retrieval augmented generation", "RAG", "knowledge retrieval"),
        query="retrieval augmented generation RAG",
        group="LLM & NLP",
    ),
    SearchPreset(
        name="prompt",
        description="Prompt engineering and optimization",
        keywords=("prompt engineering", "prompt optimization", "in-context learning"),
        query="prompt engineering optimization in-context learning",
        group="LLM & NLP",
    ),
    # Computer Vision
    SearchPreset(
        name="diffusion",
        description="Diffusion models for image generation",
        keywords=("diffusion model", "image generation", "stable diffusion"),
        query="diffusion model image generation",
        group="Computer Vision",
    ),
    SearchPreset(
        name="multimodal",
        description="Multimodal learning and vision-language",
        keywords=("multimodal", "vision language", "CLIP", "visual understanding"),
        query="multimodal vision language model",
        group="Computer Vision",
    ),
    SearchPreset(
        name="video",
        description="Video understanding and generation",
        keywords=("video understanding", "video generation", "temporal modeling"),
        query="video understanding generation temporal",
        group="Computer Vision",
    ),
    # Machine Learning
    SearchPreset(
        name="transformer",
        description="Transformer architecture improvements",
        keywords=("transformer", "attention mechanism", "efficient transformer"),
        query="transformer attention mechanism efficient",
        group="Machine Learning",
    ),
    SearchPreset(
        name="finetune",
        description="Fine-tuning and adaptation methods",
        keywords=("fine-tuning", "LoRA", "adapter", "parameter efficient"),
        query="fine-tuning LoRA adapter parameter efficient",
        group="Machine Learning",
    ),
    SearchPreset(
        name="distill",
        description="Knowledge distillation and compression",
        keywords=("knowledge distillation", "model compression", "pruning", "quantization"),
        query="knowledge distillation model compression",
        group="Machine Learning",
    ),
    SearchPreset(
        name="rl",
        description="Reinforcement learning",
        keywords=("reinforcement learning", "RLHF", "reward model", "policy optimization"),
        query="reinforcement learning RLHF reward model",
        group="Machine Learning",
    ),
    # Safety & Alignment
    SearchPreset(
        name="alignment",
        description="AI alignment and safety",
        keywords=("AI alignment", "safety", "value alignment", "constitutional AI"),
        query="AI alignment safety value",
        group="Safety & Alignment",
    ),
    SearchPreset(
        name="jailbreak",
        description="Jailbreak attacks and defenses",
        keywords=("jailbreak", "adversarial attack", "LLM security", "red teaming"),
        query="jailbreak adversarial attack LLM security",
        group="Safety & Alignment",
    ),
    SearchPreset(
        name="hallucination",
        description="Hallucination detection and mitigation",
        keywords=("hallucination", "factuality", "faithfulness", "grounding"),
        query="hallucination detection factuality LLM",
        group="Safety & Alignment",
    ),
    # Data & Training
    SearchPreset(
        name="data-synthesis",
        description="Synthetic data generation",
        keywords=("synthetic data", "data augmentation", "data generation"),
        query="synthetic data generation augmentation",
        group="Data & Training",
    ),
    SearchPreset(
        name="scaling",
        description="Scaling laws and large-scale training",
        keywords=("scaling law", "large scale training", "compute optimal"),
        query="scaling law large scale training",
        group="Data & Training",
    ),
)

PRESETS: Mapping[str, SearchPreset] = MappingProxyType({p.name: p for p in _PRESET_TABLE})


def get_preset(name: str) -> SearchPreset | None:
    return PRESETS.get(name)


def list_presets() -> list[SearchPreset]:
    """All presets sorted by name."""
    return sorted(PRESETS.values(), key=lambda p: p.name)


def presets_in_group(group: str) -> list[SearchPreset]:
    """Presets of one display group, in table order."""
    return [p for p in _PRESET_TABLE if p.group == group]
