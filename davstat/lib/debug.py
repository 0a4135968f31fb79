from lxml import etree


def xmlstring(root) -> str:
    if isinstance(root, str):
        return root
    if isinstance(root, etree._Element):
        return etree.tostring(root, pretty_print=True).decode("utf-8")
    ## fragments of an already converted tree
    return repr(root)
