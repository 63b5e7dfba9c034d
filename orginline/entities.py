from __future__ import annotations

import json
from dataclasses import asdict, dataclass

from . import t


@dataclass(frozen=True)
class EntityDef:
    # One named symbol, as written `\name` in source text,
    # with its rendering in each of the usual export targets.
    name: str
    latex: str
    latexMathp: bool
    html: str
    ascii: str
    latin1: str
    unicode: str

    def __json__(self) -> t.JSONT:
        return asdict(self)

    @classmethod
    def fromJson(cls, data: t.JSONT) -> EntityDef:
        return cls(
            name=data["name"],
            latex=data.get("latex", "\\" + data["name"]),
            latexMathp=bool(data.get("latexMathp", False)),
            html=data.get("html", f"&{data['name']};"),
            ascii=data.get("ascii", data["name"]),
            latin1=data.get("latin1", data.get("ascii", data["name"])),
            unicode=data["unicode"],
        )


# name, latex, latexMathp, html, ascii, latin1, unicode
_ENTITY_ROWS: list[tuple[str, str, bool, str, str, str, str]] = [
    # Letters: Latin
    ("Agrave", "\\`{A}", False, "&Agrave;", "A", "À", "À"),
    ("agrave", "\\`{a}", False, "&agrave;", "a", "à", "à"),
    ("Aacute", "\\'{A}", False, "&Aacute;", "A", "Á", "Á"),
    ("aacute", "\\'{a}", False, "&aacute;", "a", "á", "á"),
    ("Auml", '\\"{A}', False, "&Auml;", "Ae", "Ä", "Ä"),
    ("auml", '\\"{a}', False, "&auml;", "ae", "ä", "ä"),
    ("Ccedil", "\\c{C}", False, "&Ccedil;", "C", "Ç", "Ç"),
    ("ccedil", "\\c{c}", False, "&ccedil;", "c", "ç", "ç"),
    ("Egrave", "\\`{E}", False, "&Egrave;", "E", "È", "È"),
    ("egrave", "\\`{e}", False, "&egrave;", "e", "è", "è"),
    ("Eacute", "\\'{E}", False, "&Eacute;", "E", "É", "É"),
    ("eacute", "\\'{e}", False, "&eacute;", "e", "é", "é"),
    ("Ntilde", "\\~{N}", False, "&Ntilde;", "N", "Ñ", "Ñ"),
    ("ntilde", "\\~{n}", False, "&ntilde;", "n", "ñ", "ñ"),
    ("Ouml", '\\"{O}', False, "&Ouml;", "Oe", "Ö", "Ö"),
    ("ouml", '\\"{o}', False, "&ouml;", "oe", "ö", "ö"),
    ("Uuml", '\\"{U}', False, "&Uuml;", "Ue", "Ü", "Ü"),
    ("uuml", '\\"{u}', False, "&uuml;", "ue", "ü", "ü"),
    ("szlig", "\\ss{}", False, "&szlig;", "ss", "ß", "ß"),
    ("AElig", "\\AE{}", False, "&AElig;", "AE", "Æ", "Æ"),
    ("aelig", "\\ae{}", False, "&aelig;", "ae", "æ", "æ"),
    ("Oslash", "\\O", False, "&Oslash;", "O", "Ø", "Ø"),
    ("oslash", "\\o{}", False, "&oslash;", "o", "ø", "ø"),
    # Letters: Greek
    ("Alpha", "A", False, "&Alpha;", "Alpha", "Alpha", "Α"),
    ("alpha", "\\alpha", True, "&alpha;", "alpha", "alpha", "α"),
    ("Beta", "B", False, "&Beta;", "Beta", "Beta", "Β"),
    ("beta", "\\beta", True, "&beta;", "beta", "beta", "β"),
    ("Gamma", "\\Gamma", True, "&Gamma;", "Gamma", "Gamma", "Γ"),
    ("gamma", "\\gamma", True, "&gamma;", "gamma", "gamma", "γ"),
    ("Delta", "\\Delta", True, "&Delta;", "Delta", "Delta", "Δ"),
    ("delta", "\\delta", True, "&delta;", "delta", "delta", "δ"),
    ("Epsilon", "E", False, "&Epsilon;", "Epsilon", "Epsilon", "Ε"),
    ("epsilon", "\\epsilon", True, "&epsilon;", "epsilon", "epsilon", "ε"),
    ("varepsilon", "\\varepsilon", True, "&epsilon;", "varepsilon", "varepsilon", "ε"),
    ("Zeta", "Z", False, "&Zeta;", "Zeta", "Zeta", "Ζ"),
    ("zeta", "\\zeta", True, "&zeta;", "zeta", "zeta", "ζ"),
    ("Eta", "H", False, "&Eta;", "Eta", "Eta", "Η"),
    ("eta", "\\eta", True, "&eta;", "eta", "eta", "η"),
    ("Theta", "\\Theta", True, "&Theta;", "Theta", "Theta", "Θ"),
    ("theta", "\\theta", True, "&theta;", "theta", "theta", "θ"),
    ("Iota", "I", False, "&Iota;", "Iota", "Iota", "Ι"),
    ("iota", "\\iota", True, "&iota;", "iota", "iota", "ι"),
    ("Kappa", "K", False, "&Kappa;", "Kappa", "Kappa", "Κ"),
    ("kappa", "\\kappa", True, "&kappa;", "kappa", "kappa", "κ"),
    ("Lambda", "\\Lambda", True, "&Lambda;", "Lambda", "Lambda", "Λ"),
    ("lambda", "\\lambda", True, "&lambda;", "lambda", "lambda", "λ"),
    ("Mu", "M", False, "&Mu;", "Mu", "Mu", "Μ"),
    ("mu", "\\mu", True, "&mu;", "mu", "µ", "μ"),
    ("Nu", "N", False, "&Nu;", "Nu", "Nu", "Ν"),
    ("nu", "\\nu", True, "&nu;", "nu", "nu", "ν"),
    ("Xi", "\\Xi", True, "&Xi;", "Xi", "Xi", "Ξ"),
    ("xi", "\\xi", True, "&xi;", "xi", "xi", "ξ"),
    ("Omicron", "O", False, "&Omicron;", "Omicron", "Omicron", "Ο"),
    ("omicron", "\\textit{o}", False, "&omicron;", "omicron", "omicron", "ο"),
    ("Pi", "\\Pi", True, "&Pi;", "Pi", "Pi", "Π"),
    ("pi", "\\pi", True, "&pi;", "pi", "pi", "π"),
    ("Rho", "P", False, "&Rho;", "Rho", "Rho", "Ρ"),
    ("rho", "\\rho", True, "&rho;", "rho", "rho", "ρ"),
    ("Sigma", "\\Sigma", True, "&Sigma;", "Sigma", "Sigma", "Σ"),
    ("sigma", "\\sigma", True, "&sigma;", "sigma", "sigma", "σ"),
    ("sigmaf", "\\varsigma", True, "&sigmaf;", "sigmaf", "sigmaf", "ς"),
    ("Tau", "T", False, "&Tau;", "Tau", "Tau", "Τ"),
    ("tau", "\\tau", True, "&tau;", "tau", "tau", "τ"),
    ("Upsilon", "\\Upsilon", True, "&Upsilon;", "Upsilon", "Upsilon", "Υ"),
    ("upsilon", "\\upsilon", True, "&upsilon;", "upsilon", "upsilon", "υ"),
    ("Phi", "\\Phi", True, "&Phi;", "Phi", "Phi", "Φ"),
    ("phi", "\\phi", True, "&phi;", "phi", "phi", "ɸ"),
    ("varphi", "\\varphi", True, "&varphi;", "varphi", "varphi", "φ"),
    ("Chi", "X", False, "&Chi;", "Chi", "Chi", "Χ"),
    ("chi", "\\chi", True, "&chi;", "chi", "chi", "χ"),
    ("Psi", "\\Psi", True, "&Psi;", "Psi", "Psi", "Ψ"),
    ("psi", "\\psi", True, "&psi;", "psi", "psi", "ψ"),
    ("Omega", "\\Omega", True, "&Omega;", "Omega", "Omega", "Ω"),
    ("omega", "\\omega", True, "&omega;", "omega", "omega", "ω"),
    # Letters: other
    ("ell", "\\ell", True, "&ell;", "ell", "ell", "ℓ"),
    ("hbar", "\\hbar", True, "&hbar;", "hbar", "hbar", "ℏ"),
    ("aleph", "\\aleph", True, "&aleph;", "aleph", "aleph", "ℵ"),
    ("real", "\\Re", True, "&real;", "R", "R", "ℜ"),
    ("image", "\\Im", True, "&image;", "I", "I", "ℑ"),
    ("weierp", "\\wp", True, "&weierp;", "P", "P", "℘"),
    # Dashes and quotes
    ("nbsp", "~", False, "&nbsp;", " ", "\xa0", "\xa0"),
    ("ensp", "\\hspace*{.5em}", False, "&ensp;", " ", " ", "\u2002"),
    ("emsp", "\\hspace*{1em}", False, "&emsp;", " ", " ", "\u2003"),
    ("thinsp", "\\hspace*{.2em}", False, "&thinsp;", " ", " ", "\u2009"),
    ("shy", "\\-", False, "&shy;", "", "", "\xad"),
    ("ndash", "--", False, "&ndash;", "-", "-", "–"),
    ("mdash", "---", False, "&mdash;", "--", "--", "—"),
    ("hellip", "\\ldots{}", False, "&hellip;", "...", "...", "…"),
    ("dots", "\\ldots{}", False, "&hellip;", "...", "...", "…"),
    ("laquo", "\\guillemotleft{}", False, "&laquo;", "<<", "«", "«"),
    ("raquo", "\\guillemotright{}", False, "&raquo;", ">>", "»", "»"),
    ("ldquo", "\\textquotedblleft{}", False, "&ldquo;", '"', '"', "“"),
    ("rdquo", "\\textquotedblright{}", False, "&rdquo;", '"', '"', "”"),
    ("lsquo", "\\textquoteleft{}", False, "&lsquo;", "`", "`", "‘"),
    ("rsquo", "\\textquoteright{}", False, "&rsquo;", "'", "'", "’"),
    ("bull", "\\textbullet{}", False, "&bull;", "*", "*", "•"),
    ("middot", "\\textperiodcentered{}", False, "&middot;", ".", "·", "·"),
    # Other text symbols
    ("copy", "\\textcopyright{}", False, "&copy;", "(c)", "©", "©"),
    ("reg", "\\textregistered{}", False, "&reg;", "(r)", "®", "®"),
    ("trade", "\\texttrademark{}", False, "&trade;", "TM", "TM", "™"),
    ("sect", "\\S", False, "&sect;", "paragraph", "§", "§"),
    ("para", "\\P{}", False, "&para;", "[pilcrow]", "¶", "¶"),
    ("dagger", "\\textdagger{}", False, "&dagger;", "[dagger]", "[dagger]", "†"),
    ("Dagger", "\\textdaggerdbl{}", False, "&Dagger;", "[doubledagger]", "[doubledagger]", "‡"),
    ("deg", "\\textdegree{}", False, "&deg;", "degree", "°", "°"),
    ("euro", "\\texteuro{}", False, "&euro;", "EUR", "EUR", "€"),
    ("pound", "\\pounds{}", False, "&pound;", "pound", "£", "£"),
    ("yen", "\\textyen{}", False, "&yen;", "yen", "¥", "¥"),
    ("cent", "\\textcent{}", False, "&cent;", "cent", "¢", "¢"),
    ("checkmark", "\\checkmark", True, "&#10003;", "[checkmark]", "[checkmark]", "✓"),
    # Maths
    ("pm", "\\textpm{}", False, "&plusmn;", "+-", "±", "±"),
    ("plusmn", "\\textpm{}", False, "&plusmn;", "+-", "±", "±"),
    ("times", "\\texttimes{}", False, "&times;", "*", "×", "×"),
    ("div", "\\textdiv{}", False, "&divide;", "/", "÷", "÷"),
    ("minus", "\\minus", True, "&minus;", "-", "-", "−"),
    ("cdot", "\\cdot", True, "&sdot;", "[dot]", "[dot]", "⋅"),
    ("infin", "\\infty", True, "&infin;", "[infinity]", "[infinity]", "∞"),
    ("infty", "\\infty", True, "&infin;", "[infinity]", "[infinity]", "∞"),
    ("le", "\\le", True, "&le;", "<=", "<=", "≤"),
    ("leq", "\\le", True, "&le;", "<=", "<=", "≤"),
    ("ge", "\\ge", True, "&ge;", ">=", ">=", "≥"),
    ("geq", "\\ge", True, "&ge;", ">=", ">=", "≥"),
    ("ne", "\\ne", True, "&ne;", "[not equal]", "[not equal]", "≠"),
    ("neq", "\\ne", True, "&ne;", "[not equal]", "[not equal]", "≠"),
    ("approx", "\\approx", True, "&asymp;", "[approximately equal]", "[approximately equal]", "≈"),
    ("equiv", "\\equiv", True, "&equiv;", "[identical to]", "[identical to]", "≡"),
    ("sum", "\\sum", True, "&sum;", "[sum]", "[sum]", "∑"),
    ("prod", "\\prod", True, "&prod;", "[product]", "[n-ary product]", "∏"),
    ("int", "\\int", True, "&int;", "[integral]", "[integral]", "∫"),
    ("partial", "\\partial", True, "&part;", "[partial differential]", "[partial differential]", "∂"),
    ("nabla", "\\nabla", True, "&nabla;", "[nabla]", "[nabla]", "∇"),
    ("radic", "\\sqrt{\\,}", True, "&radic;", "[square root]", "[square root]", "√"),
    ("forall", "\\forall", True, "&forall;", "[for all]", "[for all]", "∀"),
    ("exist", "\\exists", True, "&exist;", "[there exists]", "[there exists]", "∃"),
    ("exists", "\\exists", True, "&exist;", "[there exists]", "[there exists]", "∃"),
    ("empty", "\\emptyset", True, "&empty;", "[empty set]", "[empty set]", "∅"),
    ("emptyset", "\\emptyset", True, "&empty;", "[empty set]", "[empty set]", "∅"),
    ("isin", "\\in", True, "&isin;", "[element of]", "[element of]", "∈"),
    ("in", "\\in", True, "&isin;", "[element of]", "[element of]", "∈"),
    ("notin", "\\notin", True, "&notin;", "[not an element of]", "[not an element of]", "∉"),
    ("sub", "\\subset", True, "&sub;", "[subset of]", "[subset of]", "⊂"),
    ("subset", "\\subset", True, "&sub;", "[subset of]", "[subset of]", "⊂"),
    ("sup", "\\supset", True, "&sup;", "[superset of]", "[superset of]", "⊃"),
    ("supset", "\\supset", True, "&sup;", "[superset of]", "[superset of]", "⊃"),
    ("cap", "\\cap", True, "&cap;", "[intersection]", "[intersection]", "∩"),
    ("cup", "\\cup", True, "&cup;", "[union]", "[union]", "∪"),
    ("and", "\\land", True, "&and;", "[logical and]", "[logical and]", "∧"),
    ("or", "\\lor", True, "&or;", "[logical or]", "[logical or]", "∨"),
    ("not", "\\textlnot{}", False, "&not;", "[angled dash]", "¬", "¬"),
    # Arrows
    ("larr", "\\leftarrow", True, "&larr;", "<-", "<-", "←"),
    ("leftarrow", "\\leftarrow", True, "&larr;", "<-", "<-", "←"),
    ("rarr", "\\rightarrow", True, "&rarr;", "->", "->", "→"),
    ("to", "\\to", True, "&rarr;", "->", "->", "→"),
    ("rightarrow", "\\rightarrow", True, "&rarr;", "->", "->", "→"),
    ("uarr", "\\uparrow", True, "&uarr;", "[uparrow]", "[uparrow]", "↑"),
    ("darr", "\\downarrow", True, "&darr;", "[downarrow]", "[downarrow]", "↓"),
    ("harr", "\\leftrightarrow", True, "&harr;", "<->", "<->", "↔"),
    ("lArr", "\\Leftarrow", True, "&lArr;", "<=", "<=", "⇐"),
    ("Leftarrow", "\\Leftarrow", True, "&lArr;", "<=", "<=", "⇐"),
    ("rArr", "\\Rightarrow", True, "&rArr;", "=>", "=>", "⇒"),
    ("Rightarrow", "\\Rightarrow", True, "&rArr;", "=>", "=>", "⇒"),
    ("hArr", "\\Leftrightarrow", True, "&hArr;", "<=>", "<=>", "⇔"),
    ("Leftrightarrow", "\\Leftrightarrow", True, "&hArr;", "<=>", "<=>", "⇔"),
    ("mapsto", "\\mapsto", True, "&mapsto;", "|->", "|->", "↦"),
    # Smilies and misc
    ("smile", "\\smile", True, "&#8995;", ":-)", ":-)", "⌣"),
    ("frown", "\\frown", True, "&#8994;", ":-(", ":-(", "⌢"),
    ("star", "\\star", True, "*", "*", "*", "⋆"),
    ("heartsuit", "\\heartsuit", True, "&hearts;", "<3", "<3", "♥"),
]


def _buildTable(rows: t.Iterable[tuple[str, str, bool, str, str, str, str]]) -> dict[str, EntityDef]:
    table: dict[str, EntityDef] = {}
    for name, latex, latexMathp, html, ascii, latin1, unicode in rows:
        table[name] = EntityDef(name, latex, latexMathp, html, ascii, latin1, unicode)
    return table


DEFAULT_ENTITIES: t.Mapping[str, EntityDef] = _buildTable(_ENTITY_ROWS)


def lookup(name: str, table: t.EntityTableT | None = None) -> EntityDef | None:
    if table is None:
        table = DEFAULT_ENTITIES
    return table.get(name)


def entitiesFromJson(text: str) -> dict[str, EntityDef]:
    """
    Reads an entity table from a JSON object mapping names to entity fields.
    Only "unicode" is required; the other fields default from the name.
    """
    data = json.loads(text)
    if not isinstance(data, dict):
        msg = f"Entity data must be a JSON object, got {type(data).__name__}."
        raise ValueError(msg)
    table = {}
    for name, fields in data.items():
        if isinstance(fields, str):
            fields = {"unicode": fields}
        table[name] = EntityDef.fromJson({"name": name, **fields})
    return table
