class TemplateViewError(Exception):
    # base exception for all application-specific errors.
    pass

class ConfigError(TemplateViewError):
    # errors related to configuration.
    pass

class TemplateNotFoundError(TemplateViewError):
    # neither a compiled nor a raw-script template exists for a name.
    pass

class DuplicateHelperError(TemplateViewError):
    # a helper name is already bound on the view.
    pass

class UnknownHelperError(TemplateViewError, AttributeError):
    # a helper name is not bound on the view.
    pass

class TemplateRenderError(TemplateViewError):
    # the compiling engine failed to compile or render a template.
    pass

class OutputError(TemplateViewError):
    # errors during output operations.
    pass
