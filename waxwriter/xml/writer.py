"""Streaming XML writer.

:class:`WAX` writes XML text straight to its sink as methods are called,
without building a document tree. A small state machine rejects calls made
in an illogical order, and unless "trust me" mode is enabled, names,
comments, URIs and namespace prefixes are checked before anything is
written.

Example:
    >>> import io
    >>> out = io.StringIO()
    >>> WAX(out).start("car").attr("year", 2008).child("model", "Prius").close()
    >>> print(out.getvalue())
    <car year="2008">
      <model>Prius</model>
    </car>
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, NoReturn, Self

from ..config import WriterConfig
from ..constants import Defaults, Namespaces, Version, XSLT_TARGET
from ..exceptions import InvalidArgumentError, InvalidStateError
from ..infrastructure.logging.null_logger import NullLogger
from .doctype import DocTypeBuilder
from .indentation import IndentationEngine, spaces
from .namespaces import NamespaceScopeTracker
from .schema import SchemaLocationRegistry
from .sinks import BoundSink, open_sink
from .validation import (
    escape as escape_text,
    verify_comment,
    verify_name,
    verify_uri,
    verify_version,
)

if TYPE_CHECKING:
    from types import TracebackType

    from ..ports import LoggerPort


class State(Enum):
    IN_PROLOG = "in prolog"
    IN_START_TAG = "in start tag"
    IN_ELEMENT = "in element"
    AFTER_ROOT = "after root"


@dataclass(slots=True)
class ElementFrame:
    qualified_name: str
    commented: bool = False
    has_content: bool = False
    has_indented_content: bool = False
    attribute_names: set[str] = field(default_factory=set)


def qualify(prefix: str | None, name: str) -> str:
    return f"{prefix}:{name}" if prefix else name


class WAX:
    """Writes one XML document to one sink.

    Args:
        sink: Where the XML goes. ``None`` means standard output; a path is
            opened for writing and closed by :meth:`close`; a binary stream is
            wrapped as UTF-8; any object with a ``write`` method receives text.
        version: When given, an XML declaration for that version is written
            immediately.
        config: Indentation, trust mode and line separator settings.
        logger: Receives progress messages; silent by default.
    """

    def __init__(
        self,
        sink: object = None,
        version: Version | str | None = None,
        *,
        config: WriterConfig | None = None,
        logger: LoggerPort | None = None,
    ) -> None:
        config = config or WriterConfig()
        if version is None and config.version is not None:
            version = config.version
        if version is not None and not isinstance(version, Version):
            verify_version(version)
            version = Version(version)

        self._logger: LoggerPort = logger or NullLogger()
        self._state = State.IN_PROLOG
        self._elements: list[ElementFrame] = []
        self._scopes = NamespaceScopeTracker()
        self._schemas = SchemaLocationRegistry()
        self._doctype = DocTypeBuilder()
        self._layout = IndentationEngine(config.indent, config.line_separator)
        self._check = not config.trust_me
        self.space_in_empty_elements = config.space_in_empty_elements
        self._attr_on_new_line = False
        self._output_started = False
        self._xslt_specified = False
        self._element_count = 0
        self._closed = False
        self._sink: BoundSink | None = open_sink(sink)
        self._sink_description = self._sink.description

        self._logger.log_document_start(
            self._sink_description, version.value if version else None
        )
        if version is not None:
            self._write_xml_declaration(version)

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._closed:
            return
        if exc_type is not None:
            self._release()
            return
        try:
            self.close()
        finally:
            if not self._closed:
                self._release()

    # ----------------------------------------------------------------- config

    @property
    def state(self) -> State:
        return self._state

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def depth(self) -> int:
        return len(self._elements)

    @property
    def indent(self) -> str | None:
        """The indentation unit; ``None`` keeps everything on one line."""
        return self._layout.indent

    @indent.setter
    def indent(self, value: str | None) -> None:
        self._require_open("set indent")
        self._layout.indent = value

    def set_indent(self, value: str | int | None) -> None:
        """Set the indentation from a string or a number of spaces (0-4)."""
        if isinstance(value, int) and not isinstance(value, bool):
            value = spaces(value)
        self.indent = value

    def no_indents_or_crs(self) -> None:
        self.indent = None

    @property
    def trust_me(self) -> bool:
        """Whether argument validation and default escaping are skipped."""
        return not self._check

    @trust_me.setter
    def trust_me(self, value: bool) -> None:
        self._require_open("set trust me")
        self._check = not value

    @property
    def line_separator(self) -> str:
        return self._layout.line_separator

    @line_separator.setter
    def line_separator(self, value: str) -> None:
        self._require_open("set line separator")
        if self._output_started:
            raise InvalidStateError(
                "can't change the line separator after output has started"
            )
        self._layout.line_separator = value

    # ----------------------------------------------------------------- prolog

    def dtd(self, system_id: str, public_id: str | None = None) -> Self:
        """Associate a DTD; written as a DOCTYPE when the root element starts."""
        self._require_open("dtd")
        if self._state is not State.IN_PROLOG:
            self._bad_state("dtd")
        if self._doctype.has_dtd:
            raise InvalidStateError("can't specify more than one DTD")
        if self._check:
            verify_uri(system_id)
        self._doctype.set_dtd(system_id, public_id)
        return self

    def entity_def(self, name: str, value: str) -> Self:
        """Add an entity definition to the internal subset of the DOCTYPE."""
        self._require_open("entity_def")
        if self._state is not State.IN_PROLOG:
            self._bad_state("entity_def")
        if self._check:
            verify_name(name)
        self._doctype.add_entity(name, value)
        return self

    def external_entity_def(self, name: str, path: str) -> Self:
        self._require_open("external_entity_def")
        if self._state is not State.IN_PROLOG:
            self._bad_state("external_entity_def")
        if self._check:
            verify_name(name)
            verify_uri(path)
        self._doctype.add_external_entity(name, path)
        return self

    def xslt(self, path: str) -> Self:
        """Write an ``xml-stylesheet`` processing instruction for ``path``."""
        self._require_open("xslt")
        if self._state is not State.IN_PROLOG:
            self._bad_state("xslt")
        if self._xslt_specified:
            raise InvalidStateError("can't specify more than one XSLT")
        if self._check:
            verify_uri(path)
        self._xslt_specified = True
        return self.processing_instruction(
            XSLT_TARGET, f'type="text/xsl" href="{path}"'
        )

    # ------------------------------------------------------- prolog or element

    def comment(self, text: str, new_line: bool = False) -> Self:
        """Write ``<!-- text -->``; allowed in every state."""
        self._require_open("comment")
        if self._check:
            verify_comment(text)
        self._mark_content(indented=True)
        self._terminate_start()
        if self._elements:
            self._write_indent()

        if new_line:
            self._write("<!--")
            self._write_indent()
            self._write(self._layout.unit())
            self._write(text)
            self._write_indent()
            self._write("-->")
        else:
            self._write(f"<!-- {text} -->")

        if self._layout.enabled and not self._elements:
            self._write(self._layout.line_separator)
        return self

    def processing_instruction(self, target: str, data: str) -> Self:
        self._require_open("processing_instruction")
        if self._state is State.AFTER_ROOT:
            self._bad_state("processing_instruction")
        if self._check:
            verify_name(target)
        self._mark_content(indented=True)
        self._terminate_start()
        if self._elements:
            self._write_indent()

        self._write(f"<?{target} {data}?>")

        if self._layout.enabled and not self._elements:
            self._write(self._layout.line_separator)
        return self

    pi = processing_instruction

    def start(self, name: str, *, prefix: str | None = None) -> Self:
        """Write the start tag of an element, leaving it open for attributes."""
        return self._start("start", name, prefix, commented=False)

    def commented_start(self, name: str, *, prefix: str | None = None) -> Self:
        """Like :meth:`start`, but the whole element is written inside a comment."""
        return self._start("commented_start", name, prefix, commented=True)

    def _start(
        self, operation: str, name: str, prefix: str | None, *, commented: bool
    ) -> Self:
        self._require_open(operation)
        if self._state is State.AFTER_ROOT:
            self._bad_state(operation)
        if self._check:
            if prefix:
                verify_name(prefix)
            verify_name(name)

        self._mark_content(indented=True)
        self._terminate_start()

        qualified_name = qualify(prefix, name)
        if self._state is State.IN_PROLOG:
            self._write_doctype(qualified_name)

        # The previous start tag was just verified, so this prefix is checked
        # when this element's own start tag ends.
        if self._check and prefix:
            self._scopes.reference(prefix)

        if self._elements:
            self._write_indent()
        self._write(f"<!--{qualified_name}" if commented else f"<{qualified_name}")

        self._elements.append(ElementFrame(qualified_name, commented=commented))
        self._scopes.push_scope()
        self._element_count += 1
        self._state = State.IN_START_TAG
        return self

    # -------------------------------------------------------------- start tag

    def attr(
        self,
        name: str,
        value: object,
        *,
        prefix: str | None = None,
        new_line: bool | None = None,
    ) -> Self:
        """Write an attribute on the open start tag.

        The value is converted with ``str`` and written as is, without
        escaping. ``new_line`` defaults to ``True`` once a namespace has been
        declared on the element.
        """
        self._require_open("attr")
        if self._state is not State.IN_START_TAG:
            self._bad_state("attr")

        frame = self._elements[-1]
        qualified_name = qualify(prefix, name)
        if self._check:
            if prefix:
                verify_name(prefix)
            verify_name(name)
            if qualified_name in frame.attribute_names:
                raise InvalidArgumentError(
                    f'The attribute "{qualified_name}" is defined twice in this element.'
                )
            if prefix:
                self._scopes.reference(prefix)
        frame.attribute_names.add(qualified_name)

        if new_line is None:
            new_line = self._attr_on_new_line
        if new_line and self._layout.enabled:
            self._write_indent()
        else:
            self._write(" ")
        self._write(f'{qualified_name}="{value}"')
        return self

    def namespace(
        self,
        uri: str,
        *,
        prefix: str | None = None,
        schema_path: str | None = None,
    ) -> Self:
        """Declare a namespace on the open start tag.

        Without a prefix this declares the default namespace. When
        ``schema_path`` is given, an ``xsi:schemaLocation`` attribute pairing
        ``uri`` with it is added before the start tag ends.
        """
        self._require_open("namespace")
        if self._state is not State.IN_START_TAG:
            self._bad_state("namespace")

        prefix = prefix or ""
        if self._check:
            if prefix:
                verify_name(prefix)
            verify_uri(uri)
            if schema_path is not None:
                verify_uri(schema_path)
        self._scopes.declare(prefix, check=self._check)

        if self._layout.enabled:
            self._write_indent()
        else:
            self._write(" ")
        self._write(f'xmlns:{prefix}="{uri}"' if prefix else f'xmlns="{uri}"')

        if schema_path is not None:
            self._schemas.register(uri, schema_path)
        self._attr_on_new_line = True
        return self

    ns = namespace

    def default_namespace(self, uri: str, schema_path: str | None = None) -> Self:
        return self.namespace(uri, schema_path=schema_path)

    default_ns = default_namespace

    # ---------------------------------------------------------------- content

    def text(
        self,
        text: object,
        new_line: bool = False,
        escape: bool | None = None,
    ) -> Self:
        """Write text content in the current element.

        Special characters are escaped unless ``escape`` is false or, when it
        is left as ``None``, unless "trust me" mode is on.
        """
        self._require_open("text")
        if self._state in (State.IN_PROLOG, State.AFTER_ROOT):
            self._bad_state("text")
        if escape is None:
            escape = self._check

        frame = self._elements[-1]
        frame.has_content = True
        frame.has_indented_content = new_line
        self._terminate_start()

        text = "" if text is None else str(text)
        if text:
            if new_line:
                self._write_indent()
            self._write(escape_text(text) if escape else text)
        elif new_line:
            self._write(self._layout.line_separator)
        return self

    def raw_text(self, text: object, new_line: bool = False) -> Self:
        return self.text(text, new_line, escape=False)

    def nl_text(self, text: object) -> Self:
        return self.text(text, True, self._check)

    def blank_line(self) -> Self:
        return self.nl_text("")

    def cdata(self, text: str, new_line: bool = True) -> Self:
        self._require_open("cdata")
        if self._state in (State.IN_PROLOG, State.AFTER_ROOT):
            self._bad_state("cdata")
        return self.text(f"<![CDATA[{text}]]>", new_line, escape=False)

    def child(self, name: str, text: object, *, prefix: str | None = None) -> Self:
        """Shortcut for ``start(name).text(text).end()``."""
        self._require_open("child")
        if self._state is State.AFTER_ROOT:
            self._bad_state("child")
        return self.start(name, prefix=prefix).text(text).end()

    def end(self, verbose: bool = False) -> Self:
        """End the current element.

        An element without content is closed with ``/>`` unless ``verbose``
        asks for a separate end tag.
        """
        self._require_open("end")
        if self._state in (State.IN_PROLOG, State.AFTER_ROOT):
            self._bad_state("end")

        if self._state is State.IN_START_TAG:
            self._write_schema_locations()
        self._check_pending()

        frame = self._elements.pop()
        self._scopes.pop_scope()

        if frame.has_content or verbose:
            if not frame.has_content:
                self._write(">")
            if frame.has_indented_content:
                self._write_indent()
            suffix = "-->" if frame.commented else ">"
            self._write(f"</{frame.qualified_name}{suffix}")
        else:
            close = " />" if self.space_in_empty_elements else "/>"
            self._write(close[:-1] + "-->" if frame.commented else close)

        self._mark_content(indented=True)
        self._attr_on_new_line = False
        self._state = State.IN_ELEMENT if self._elements else State.AFTER_ROOT
        return self

    def close(self) -> None:
        """End every open element and release the sink.

        Nothing can be written afterwards. The sink is released exactly once,
        and the writer counts as closed even if releasing it fails.
        """
        if self._closed:
            raise InvalidStateError("already closed")
        if self._state is State.IN_PROLOG:
            self._bad_state("close")

        while self._elements:
            self.end()

        self._release()
        self._logger.log_document_complete(
            self._sink_description, self._element_count
        )

    # -------------------------------------------------------------- internals

    def _bad_state(self, operation: str) -> NoReturn:
        raise InvalidStateError(
            f"can't call {operation} when state is {self._state.name}"
        )

    def _require_open(self, operation: str) -> None:
        if self._closed:
            raise InvalidStateError(f"can't call {operation} after close")

    def _mark_content(self, *, indented: bool) -> None:
        if self._elements:
            frame = self._elements[-1]
            frame.has_content = True
            frame.has_indented_content = indented

    def _release(self) -> None:
        sink, self._sink = self._sink, None
        self._closed = True
        if sink is not None:
            sink.release()

    def _check_pending(self) -> None:
        if self._check:
            self._scopes.verify_pending()
        else:
            self._scopes.discard_pending()

    def _terminate_start(self) -> None:
        if self._state is State.IN_START_TAG:
            self._write_schema_locations()
        self._check_pending()
        if self._state is not State.IN_START_TAG:
            return
        self._write(">")
        self._attr_on_new_line = False
        self._state = State.IN_ELEMENT

    def _write(self, text: str) -> None:
        if self._sink is None:
            raise InvalidStateError(
                "attempting to write XML after close has been called"
            )
        self._sink.write(text)
        self._output_started = True

    def _write_indent(self) -> None:
        if self._layout.enabled:
            self._write(self._layout.at(len(self._elements)))

    def _write_doctype(self, root_name: str) -> None:
        if not self._doctype.has_content:
            return
        self._logger.debug(f"Writing DOCTYPE for root element {root_name}")
        self._write(
            self._doctype.render(
                root_name, newline=self._layout.newline, indent=self._layout.unit()
            )
        )

    def _write_schema_locations(self) -> None:
        """Write the queued ``xsi:schemaLocation`` pairs.

        ``xsi`` is declared here unless it is already in scope.
        """
        if self._schemas.is_empty():
            return
        if self._layout.enabled:
            separator = self._layout.at(len(self._elements) + 1)
        else:
            separator = " "
        locations = self._schemas.render(separator)
        self._logger.debug(f"Writing schemaLocation for {len(self._schemas)} namespaces")
        self._schemas.clear()

        if not self._scopes.is_in_scope(Namespaces.XMLSCHEMA_INSTANCE_PREFIX):
            self.namespace(
                Namespaces.XMLSCHEMA_INSTANCE,
                prefix=Namespaces.XMLSCHEMA_INSTANCE_PREFIX,
            )
        self.attr(
            Namespaces.SCHEMA_LOCATION_ATTR,
            locations,
            prefix=Namespaces.XMLSCHEMA_INSTANCE_PREFIX,
            new_line=self._layout.enabled,
        )
        self._attr_on_new_line = True

    def _write_xml_declaration(self, version: Version) -> None:
        if version is Version.V1_2:
            self._logger.warning(
                "XML 1.2 is not a published XML version; "
                "the declaration is written as requested"
            )
        self._write(
            f'<?xml version="{version.value}" encoding="{Defaults.ENCODING}"?>'
            f"{self._layout.line_separator}"
        )
