from __future__ import annotations
from dataclasses import dataclass, field, replace
import os.path


@dataclass
class RepoConf:
    """Base class for repo config. Use a subclass such as :class:`JsonRepoConf`."""

    def instantiate(self):
        raise NotImplementedError("Please use a subclass like JsonRepoConf instead!")

    def standardize(self):
        return self


@dataclass
class JsonRepoConf(RepoConf):
    """Configures notetagger to keep notes in a single JSON file, via :class:`notetagger.repos.jsonfile.JsonFileRepo`."""

    path: str = 'notes.json'
    """Where the notes are stored.
    
    Relative paths are resolved against the current working directory when the configuration is standardized,
    so by default each directory you run the tool in gets its own ``notes.json``. The file is created the first
    time a note is added.
    """

    def instantiate(self):
        from notetagger.repos.jsonfile import JsonFileRepo
        return JsonFileRepo(self.standardize())

    def standardize(self):
        return replace(
            self,
            path=os.path.abspath(os.path.expanduser(self.path))
        )


@dataclass
class NoteTaggerConf:
    repo_conf: RepoConf = field(default_factory=JsonRepoConf)
    """Configures where your notes are stored."""

    date_format: str = '%x %H:%M'
    """The ``strftime`` format used by the CLI to show when a note was created, in local time.
    
    The default is the locale's short date followed by hours and minutes.
    """

    @classmethod
    def user_config_path(cls) -> str:
        return os.path.expanduser(os.path.join('~', '.notetagger.conf.py'))

    @classmethod
    def for_user(cls) -> NoteTaggerConf:
        """Loads the configuration from ``~/.notetagger.conf.py``, or returns the defaults if that file is absent.

        The file is a Python script that must assign an instance of this class to a variable named ``conf``:

        .. code-block:: python

           from notetagger.conf import *
           conf = NoteTaggerConf(repo_conf=JsonRepoConf(path='~/notes.json'))
        """
        path = cls.user_config_path()
        if not os.path.exists(path):
            return cls()
        with open(path, 'r') as file:
            conf_script = file.read()
        context = {}
        exec(conf_script, context)
        if 'conf' not in context or not isinstance(context['conf'], cls):
            raise Exception('You need to assign an instance of NoteTaggerConf to the variable `conf` '
                            f'in your config file: {path}')
        return context['conf']

    def standardize(self):
        return replace(
            self,
            repo_conf=self.repo_conf.standardize()
        )

    def instantiate(self):
        from notetagger.api import NoteTagger
        return NoteTagger(self.standardize())
