"""Character-entity elements of the Doxygen description schema."""

# Elements whose tag name is also the HTML entity name: <copy/> -> &copy;
NAMED_ENTITIES = frozenset(
    """
    iexcl cent pound curren yen brvbar sect copy ordf laquo not shy macr deg
    plusmn sup1 sup2 sup3 acute micro middot cedil ordm raquo frac14 frac12
    frac34 iquest Agrave Aacute Acirc Atilde Aring AElig Ccedil Egrave Eacute
    Ecirc Igrave Iacute Icirc ETH Ntilde Ograve Oacute Ocirc Otilde times
    Oslash Ugrave Uacute Ucirc Yacute THORN szlig agrave aacute acirc atilde
    aring aelig ccedil egrave eacute ecirc igrave iacute icirc eth ntilde
    ograve oacute ocirc otilde divide oslash ugrave uacute ucirc yacute thorn
    fnof Alpha Beta Gamma Delta Epsilon Zeta Eta Theta Iota Kappa Lambda Mu Nu
    Xi Omicron Pi Rho Sigma Tau Upsilon Phi Chi Psi Omega alpha beta gamma
    delta epsilon zeta eta theta iota kappa lambda mu nu xi omicron pi rho
    sigmaf sigma tau upsilon phi chi psi omega thetasym upsih piv bull hellip
    prime Prime oline frasl weierp image euro real alefsym larr uarr rarr darr
    harr crarr lArr uArr rArr dArr hArr forall part exist empty nabla isin
    notin ni prod sum minus lowast radic prop infin ang and or cap cup int
    there4 sim cong asymp ne equiv le ge sub sup nsub sube supe oplus otimes
    perp sdot lceil rceil lfloor rfloor lang rang loz spades clubs hearts diams
    OElig oelig Scaron scaron circ tilde ensp emsp thinsp zwnj zwj lrm rlm
    ndash mdash lsquo rsquo sbquo ldquo rdquo bdquo dagger Dagger permil
    lsaquo rsaquo
    """.split()
)

# Elements whose tag name differs from the entity they stand for
ALIASED_ENTITIES = {
    "nonbreakablespace": "&nbsp;",
    "umlaut": "&uml;",
    "registered": "&reg;",
    "trademark": "&trade;",
    "Aumlaut": "&Auml;",
    "Eumlaut": "&Euml;",
    "Iumlaut": "&Iuml;",
    "Oumlaut": "&Ouml;",
    "Uumlaut": "&Uuml;",
    "aumlaut": "&auml;",
    "eumlaut": "&euml;",
    "iumlaut": "&iuml;",
    "oumlaut": "&ouml;",
    "uumlaut": "&uuml;",
    "yumlaut": "&yuml;",
    "Yumlaut": "&Yuml;",
}


def entity_for(tag):
    if tag in NAMED_ENTITIES:
        return f"&{tag};"
    return ALIASED_ENTITIES[tag]
