"""Constants shared across the inspector."""

# Namespace prefixed to a short type name to form a built-in type identifier
BUILTIN_NAMESPACE = 'com.google.appinventor.components.runtime'

# Structural keys of a serialized component node
NAME_KEY = '$Name'
TYPE_KEY = '$Type'
COMPONENTS_KEY = '$Components'
UUID_KEY = 'Uuid'

# Keys of a raw node that never count as properties (besides any '$' key)
NON_PROPERTY_KEYS = frozenset({UUID_KEY})

# Zero sentinel used when a node carries no Uuid
MISSING_UID = 0

# Designer editor types, grouped by the value parser applied to them
BOOLEAN_EDITORS = frozenset({'boolean', 'visibility'})
COLOR_EDITORS = frozenset({'color'})
INTEGER_EDITORS = frozenset({'integer', 'non_negative_integer'})
FLOAT_EDITORS = frozenset({'float', 'non_negative_float'})
NON_NEGATIVE_EDITORS = frozenset({'non_negative_integer', 'non_negative_float'})
ALIGNMENT_EDITOR_SUFFIX = 'alignment'

# Top-level block types accepted by the blocks editor
VALID_BLOCK_TYPES = frozenset({
    'global_declaration',
    'component_event',
    'procedures_defnoreturn',
    'procedures_defreturn',
    'component_method',
    'component_set_get',
})

# Block type → summary bucket
BLOCK_KIND_MAP: dict[str, str] = {
    'component_event': 'events',
    'component_method': 'methods',
    'component_set_get': 'properties',
    'global_declaration': 'variables',
    'procedures_defnoreturn': 'procedures',
    'procedures_defreturn': 'procedures',
}
