def to_wire(text):
    """XML text as bytes, which is what the lxml parser wants when the
    document carries an encoding declaration"""
    if text is None:
        return None
    if isinstance(text, str):
        text = bytes(text, "utf-8")
    return text
