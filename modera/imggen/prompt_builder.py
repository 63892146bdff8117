"""Prompt construction for the studio photo generation step."""

from __future__ import annotations

from modera.catalog.attributes import AttributeSet


class PromptBuilder:
    """Builds the fixed-template studio prompt from an attribute snapshot."""

    def build(self, config: AttributeSet) -> str:
        """Return the natural-language instruction for dressing a model in the uploaded garment."""

        sections = [
            "Create a high-end, photorealistic fashion studio photograph.",
            (
                f"SUBJECT: A {config.age_group.value} {config.gender.value} model "
                f"with {config.skin_tone.value} skin tone."
            ),
            (
                "CLOTHING: The model is wearing the EXACT clothing item provided in the input image.\n"
                "The clothing must fit perfectly on the model's body with realistic fabric drapes, "
                "shadows, folds, and texture.\n"
                "The clothing type, pattern, and color must match the input image exactly."
            ),
            (
                f"POSE & SETTING: The model is posing in a {config.pose.value} stance.\n"
                f"CAMERA ANGLE: The camera view is {config.view.value}.\n"
                f"The overall style is {config.style.value}.\n"
                "The background is a neutral, professional studio backdrop with soft, high-quality "
                "lighting emphasizing the product details."
            ),
            (
                "QUALITY: Masterpiece, 8k, highly detailed, commercial fashion photography, "
                "vogue style, sharp focus, cinematic lighting."
            ),
        ]
        return "\n\n".join(sections)


def compose_prompt(config: AttributeSet) -> str:
    return PromptBuilder().build(config)
