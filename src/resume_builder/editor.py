"""Editing session: the single writer over the document and its customization.

Every mutation goes through the path store, is validated, published as a
whole new tree, then persisted. Rendering and exports read the published
trees only.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable

from pydantic import ValidationError

from resume_builder import path_store
from resume_builder.clients.ai_client import AIClient
from resume_builder.config import AppConfig
from resume_builder.errors import ExternalServiceError, ImageDecodeFailure, PathError
from resume_builder.export.docx_renderer import generate_docx
from resume_builder.export.pdf_renderer import render_pdf, render_print_html
from resume_builder.export.rtf_encoder import render_rtf
from resume_builder.models.customization import (
    CustomizationBundle,
    CustomizationOptions,
    ResumeTheme,
    TemplateConfig,
    apply_theme,
)
from resume_builder.models.resume import (
    ResumeData,
    ensure_unique_ids,
    has_content,
    is_complete,
    new_list_item,
)
from resume_builder.pipeline.layout import auto_escalate
from resume_builder.pipeline.renderer import RenderedDocument, render_document
from resume_builder.pipeline.suggestions import SuggestionKind, build_context, generate_suggestion
from resume_builder.storage.local_store import LocalStore
from resume_builder.themes import ALL_THEMES, get_theme
from resume_builder.utils.images import load_image_reference
from resume_builder.utils.text import safe_filename

logger = logging.getLogger(__name__)

PROFILE_IMAGE_PATH = "personal_info.profile_image"


class EditorSession:
    """Owns the current document and customization trees for one user."""

    def __init__(
        self,
        store: LocalStore | None = None,
        config: AppConfig | None = None,
        ai_client: AIClient | None = None,
    ):
        self.config = config or AppConfig()
        self.store = store
        self._ai_client = ai_client

        if store is not None:
            document = store.load_resume_data()
            bundle = store.load_customization()
        else:
            document, bundle = ResumeData(), CustomizationBundle()
        self._document = document
        self._bundle = bundle
        self._tree: dict = document.model_dump()
        self._custom_tree: dict = bundle.model_dump()

    # -- read side -----------------------------------------------------------

    @property
    def document(self) -> ResumeData:
        return self._document

    @property
    def tree(self) -> dict:
        return self._tree

    @property
    def options(self) -> CustomizationOptions:
        return self._bundle.options

    @property
    def template_config(self) -> TemplateConfig:
        return self._bundle.template_config

    @property
    def theme(self) -> ResumeTheme:
        return get_theme(self.options.theme_id)

    def get(self, path: path_store.PathLike, default: Any = None) -> Any:
        return path_store.get_in(self._tree, path, default)

    def has_content(self) -> bool:
        return has_content(self._document)

    def is_complete(self) -> bool:
        return is_complete(self._document)

    # -- document mutations --------------------------------------------------

    def set(self, path: path_store.PathLike, value: Any) -> ResumeData:
        return self._commit(lambda tree: path_store.set_in(tree, path, value), path)

    def insert(self, array_path: path_store.PathLike, item: Any, index: int | None = None) -> ResumeData:
        return self._commit(lambda tree: path_store.insert(tree, array_path, item, index), array_path)

    def remove_at(self, array_path: path_store.PathLike, index: int) -> ResumeData:
        return self._commit(lambda tree: path_store.remove_at(tree, array_path, index), array_path)

    def move(self, array_path: path_store.PathLike, from_index: int, to_index: int) -> ResumeData:
        return self._commit(
            lambda tree: path_store.move(tree, array_path, from_index, to_index), array_path
        )

    def add_item(self, section: str, index: int | None = None, **fields: Any) -> str:
        """Insert a new record into a list section and return its id."""
        item = new_list_item(section, **fields)
        self.insert(section, item, index)
        return item["id"]

    def _commit(self, mutate: Callable[[dict], dict], path: path_store.PathLike) -> ResumeData:
        new_tree = mutate(self._tree)
        if new_tree is self._tree:
            return self._document
        try:
            document = ensure_unique_ids(ResumeData.model_validate(new_tree))
        except ValidationError as exc:
            raise PathError(
                f"Invalid value at {path_store.format_path(path)}: {exc.errors()[0]['msg']}"
            ) from exc

        self._document = document
        self._tree = document.model_dump()
        if self.store is not None:
            self.store.save_resume_data(document)
        self._maybe_escalate()
        return document

    def _maybe_escalate(self) -> None:
        options = auto_escalate(self.options, self._document, self.config.layout)
        if options is not self.options:
            self._publish_bundle(self._bundle.model_copy(update={"options": options}))

    # -- customization mutations ---------------------------------------------

    def set_customization(self, path: path_store.PathLike, value: Any) -> CustomizationBundle:
        """Write into the customization bundle, e.g. ``options.colors.primary``."""
        new_tree = path_store.set_in(self._custom_tree, path, value)
        try:
            bundle = CustomizationBundle.model_validate(new_tree)
        except ValidationError as exc:
            raise PathError(
                f"Invalid value at {path_store.format_path(path)}: {exc.errors()[0]['msg']}"
            ) from exc
        self._publish_bundle(bundle)
        return bundle

    def apply_theme(self, theme_id: str) -> CustomizationOptions:
        if theme_id not in ALL_THEMES:
            raise ValueError(f"Unknown theme: {theme_id!r}")
        options = apply_theme(self.options, ALL_THEMES[theme_id])
        self._publish_bundle(self._bundle.model_copy(update={"options": options}))
        return options

    def set_layout(self, layout: str) -> CustomizationBundle:
        return self.set_customization(("options", "layout"), layout)

    def set_template(self, section_key: str, template_id: str) -> CustomizationBundle:
        return self.set_customization(("template_config", "templates", section_key), template_id)

    def set_section_style(self, section_key: str, field: str, value: str) -> CustomizationBundle:
        return self.set_customization(("options", "sections", section_key, field), value)

    def _publish_bundle(self, bundle: CustomizationBundle) -> None:
        self._bundle = bundle
        self._custom_tree = bundle.model_dump()
        if self.store is not None:
            self.store.save_customization(bundle)

    # -- rendering and export ------------------------------------------------

    def render(self) -> RenderedDocument:
        return render_document(self._document, self.options, self.theme, self.template_config)

    def _output_path(self, extension: str, output_dir: str | Path | None) -> Path:
        directory = Path(output_dir or self.config.export.output_dir)
        directory.mkdir(parents=True, exist_ok=True)
        return directory / safe_filename(self._document.personal_info.full_name, extension)

    def export_html(self, output_dir: str | Path | None = None) -> Path:
        html = render_print_html(self._document, self.options, self.theme, self.config.export)
        path = self._output_path("html", output_dir)
        path.write_text(html, encoding="utf-8")
        return path

    def export_pdf(self, output_dir: str | Path | None = None) -> Path:
        pdf = render_pdf(self._document, self.options, self.theme, self.config.export)
        path = self._output_path("pdf", output_dir)
        path.write_bytes(pdf)
        return path

    def export_rtf(self, output_dir: str | Path | None = None) -> Path:
        rtf = render_rtf(self._document, self.options, self.theme, self.config.export)
        path = self._output_path("rtf", output_dir)
        # Non-ASCII is already escaped, so the text is pure ASCII.
        path.write_text(rtf, encoding="ascii")
        return path

    def export_docx(self, output_dir: str | Path | None = None) -> Path:
        return generate_docx(
            self._document,
            self.options,
            self._output_path("docx", output_dir),
            self.theme,
            self.config.export,
        )

    # -- asynchronous operations ---------------------------------------------

    async def upload_profile_image(
        self, file_path: str | Path, target: path_store.PathLike = PROFILE_IMAGE_PATH
    ) -> str | None:
        """Load an image into ``target``. Returns an error message on failure."""
        try:
            reference = await load_image_reference(file_path)
        except ImageDecodeFailure as exc:
            logger.warning("Image upload failed: %s", exc)
            return str(exc)
        self.set(target, reference)
        return None

    @property
    def ai_client(self) -> AIClient:
        if self._ai_client is None:
            self._ai_client = AIClient(config=self.config.ai)
        return self._ai_client

    async def request_suggestion(
        self, kind: SuggestionKind | str, target_path: path_store.PathLike
    ) -> str | None:
        """Ask for AI text and apply it with one write. Returns an error message on failure."""
        kind = SuggestionKind(kind)
        context = build_context(self._tree, kind, target_path)
        try:
            result = await generate_suggestion(self.ai_client, kind, context)
        except ExternalServiceError as exc:
            logger.warning("Suggestion %s failed: %s", kind.value, exc)
            return str(exc)

        if isinstance(result, list):
            value = self._merge_skills(target_path, result)
        else:
            value = result
        try:
            self.set(target_path, value)
        except PathError as exc:
            # The target may have been removed while the call was pending.
            logger.warning("Suggestion for %s discarded: %s", path_store.format_path(target_path), exc)
            return str(exc)
        return None

    def _merge_skills(self, target_path: path_store.PathLike, names: list[str]) -> list[dict]:
        current = list(self.get(target_path, []) or [])
        known = {item.get("name", "").strip().lower() for item in current}
        for name in names:
            if name.lower() in known:
                continue
            known.add(name.lower())
            current.append(new_list_item("skills", name=name))
        return current
