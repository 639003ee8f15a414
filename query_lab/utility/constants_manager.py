from dotenv import load_dotenv, find_dotenv
import os

class ConstantsManager:
    _dotenv_loaded = False

    def __init__(self):
        if not ConstantsManager._dotenv_loaded:
            load_dotenv(dotenv_path=find_dotenv(usecwd=True), override=False)
            ConstantsManager._dotenv_loaded = True

    def get_variable(self, variableName, default=None):
        variable = os.environ.get(variableName, "")
        if variable == "":
            if default is None:
                raise Exception(f"Could not find {variableName} environment variable")
            return default
        return variable

    def get_delimiter(self):
        return self.get_variable('QUERY_FILTERS_DELIMITER', ',')

    def get_preserve_url_order(self):
        return self.get_variable('QUERY_FILTERS_PRESERVE_URL_ORDER', 'true').strip().lower() in ('1', 'true', 'yes', 'on')

    def get_apply_url(self):
        return os.environ.get('QUERY_FILTERS_APPLY_URL') or None

    def get_log_level(self):
        return self.get_variable('LOG_LEVEL', 'INFO').upper()
