"""Building the signature and attribute markup shown next to symbol names."""

from markupsafe import Markup, escape

from doclet_html.doclet import Doclet, Param
from doclet_html.type_expression import TypeLinker


def needs_signature(doclet: Doclet) -> bool:
    """Check if a doclet is shown with a call signature."""
    if doclet.kind == "function":
        return True
    if doclet.kind == "class" and not doclet.hideconstructor:
        return True
    # Typedefs of function types get a signature too.
    if doclet.kind == "typedef" and doclet.type:
        return any(n.lower() == "function" for n in doclet.type.names)
    return False


def get_attribs(item: Doclet | Param) -> list[str]:
    """Return the attribute words (static, readonly, ...) of a doclet or param."""
    attribs: list[str] = []
    if isinstance(item, Doclet):
        if item.is_async:
            attribs.append("async")
        if item.generator:
            attribs.append("generator")
        if item.virtual:
            attribs.append("abstract")
        if item.access and item.access != "public":
            attribs.append(item.access)
        if (
            item.scope
            and item.scope not in {"instance", "global"}
            and item.kind in {"function", "member", "constant"}
        ):
            attribs.append(item.scope)
        if item.readonly and item.kind == "member":
            attribs.append("readonly")
        if item.kind == "constant":
            attribs.append("constant")
    if item.nullable is True:
        attribs.append("nullable")
    elif item.nullable is False:
        attribs.append("non-null")
    return attribs


def attribs_markup(attribs: list[str]) -> Markup:
    """Format attribute words as ``(static, readonly) ``."""
    if not attribs:
        return Markup("")
    return escape(f"({', '.join(attribs)}) ")


def param_display_name(param: Param) -> Markup:
    """Return a parameter's name as shown inside a signature."""
    name = escape(param.name)
    if param.variable:
        name = Markup("&hellip;") + name

    attributes = []
    if param.optional:
        attributes.append("opt")
    if param.nullable is True:
        attributes.append("nullable")
    elif param.nullable is False:
        attributes.append("non-null")
    if attributes:
        name += Markup('<span class="signature-attributes">{}</span>').format(
            ", ".join(attributes)
        )
    return name


def type_strings(item: Doclet | Param, linker: TypeLinker) -> list[Markup]:
    """Render each type name of an item with links to documented types."""
    if not item.type:
        return []
    return [linker.link_type_expression(name) for name in item.type.names]


def add_signature_params(doclet: Doclet) -> None:
    """Append ``(a, b)`` to the signature; nested ``a.b`` params are omitted."""
    params = [p for p in doclet.params if p.name and "." not in p.name]
    names = Markup(", ").join(param_display_name(p) for p in params)
    doclet.signature = Markup("{}({}) ").format(doclet.signature, names)


def add_signature_returns(doclet: Doclet, linker: TypeLinker) -> None:
    """Wrap the signature and append the return types."""
    attribs: list[str] = []
    return_types: list[Markup] = []
    # Attributes of several @returns tags are lumped together.
    for ret in doclet.returns:
        for attrib in get_attribs(ret):
            if attrib not in attribs:
                attribs.append(attrib)
        return_types.extend(type_strings(ret, linker))

    returns = Markup("")
    if return_types:
        returns = Markup(" &rarr; {}{{{}}}").format(
            attribs_markup(attribs), Markup("|").join(return_types)
        )
    doclet.signature = Markup(
        '<span class="signature">{}</span><span class="type-signature">{}</span>'
    ).format(doclet.signature, returns)


def add_signature_types(doclet: Doclet, linker: TypeLinker) -> None:
    """Append `` :Type|Other`` for members and constants."""
    types = type_strings(doclet, linker)
    text = Markup(" :") + Markup("|").join(types) if types else Markup("")
    doclet.signature += Markup('<span class="type-signature">{}</span>').format(text)


def add_attribs(doclet: Doclet) -> None:
    """Set the attribute markup shown before a symbol's name."""
    doclet.attribs = Markup('<span class="type-signature">{}</span>').format(
        attribs_markup(get_attribs(doclet))
    )
