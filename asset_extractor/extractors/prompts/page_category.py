"""Page category prompt for the vision fallback."""

PAGE_CATEGORY_SYSTEM = (
    "You classify single pages from utility work-order packages. "
    "You answer with exactly one word."
)

PAGE_CATEGORY_PROMPT = '''Classify this page from a utility work-order package into ONE category.

SKETCH - A construction sketch or pole sheet: dimensioned line drawing of poles, \
conductors, services or equipment, usually with a title block and hand or CAD \
annotations. Mostly white background with black linework.

MAP - A circuit map or location map: street grid or feeder layout with legend \
symbols, pole or transformer number annotations, circuit map change sheet \
title blocks, north arrows or scale bars.

PHOTO - A real-world photograph of a job site, pole, equipment, street or \
vegetation, possibly with a caption or watermark.

FORM - An administrative form: checkboxes, signature lines, tables of fields \
to fill in, billing or crew sheets.

Answer with exactly one word: SKETCH, MAP, PHOTO or FORM.'''
