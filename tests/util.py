"""Test helpers: an in-process stand-in for libhunspell.

FakeHunspell exposes the same Hunspell_* calls as the real library, but the
lists it returns are real cffi allocations, so pyhunspell's pointer handling
and release bookkeeping run unchanged.
"""

from pyhunspell._loader import ffi


class FakeEngine:
    """State behind one fake Hunhandle."""

    def __init__(self, affix, dictionary, key):
        self.affix = affix
        self.dictionary = dictionary
        self.key = key
        self.words = {"cat", "dog", "program"}
        self.plural = {"cat", "dog", "program"}
        self.dictionaries = []


class FakeHunspell:
    """Records every call and every list handed out and freed."""

    def __init__(self, encoding=b"UTF-8"):
        self.encoding = encoding
        # words cross the boundary in the dictionary encoding
        self.codec = encoding.decode("latin-1")
        self.engines = {}
        self.calls = []
        self.destroyed = []
        self.freed = []
        self.outstanding = {}
        self.fail_create = False
        self.fail_add_dic = False
        self.status = {}
        self.list_override = {}
        self._alive = []

    # -- helpers --

    def _keep(self, obj):
        self._alive.append(obj)
        return obj

    def _text(self, word):
        return word.decode(self.codec)

    def _engine(self, h):
        return self.engines[int(ffi.cast("uintptr_t", h))]

    def _out(self, name, slst, items):
        override = self.list_override.get(name)
        if override is not None:
            return override(self, slst)
        if not items:
            slst[0] = ffi.NULL
            return 0
        strings = [self._keep(ffi.new("char[]", s)) for s in items]
        arr = self._keep(ffi.new("char *[]", strings))
        slst[0] = arr
        self.outstanding[int(ffi.cast("uintptr_t", arr))] = name
        return len(items)

    def make_list(self, name, slst, items, count=None):
        """Install ``items`` (bytes or None for NULL) as a returned list."""
        strings = [ffi.NULL if s is None else self._keep(ffi.new("char[]", s)) for s in items]
        arr = self._keep(ffi.new("char *[]", strings or [ffi.NULL]))
        slst[0] = arr
        self.outstanding[int(ffi.cast("uintptr_t", arr))] = name
        return len(items) if count is None else count

    # -- construction --

    def Hunspell_create(self, affix, dictionary):
        return self._create(affix, dictionary, None)

    def Hunspell_create_key(self, affix, dictionary, key):
        return self._create(affix, dictionary, key)

    def _create(self, affix, dictionary, key):
        self.calls.append(("create", affix, dictionary, key))
        if self.fail_create:
            return ffi.NULL
        h = ffi.cast("Hunhandle *", self._keep(ffi.new("int *")))
        self.engines[int(ffi.cast("uintptr_t", h))] = FakeEngine(affix, dictionary, key)
        return h

    def Hunspell_destroy(self, h):
        self.calls.append(("destroy",))
        self.destroyed.append(int(ffi.cast("uintptr_t", h)))

    def Hunspell_get_dic_encoding(self, h):
        return self._keep(ffi.new("char[]", self.encoding))

    # -- lexicon --

    def Hunspell_add_dic(self, h, path):
        self.calls.append(("add_dic", path))
        if self.fail_add_dic:
            return 1
        self._engine(h).dictionaries.append(path)
        return 0

    def Hunspell_add(self, h, word):
        self.calls.append(("add", word))
        self._engine(h).words.add(self._text(word))
        return self.status.get("add", 0)

    def Hunspell_add_with_affix(self, h, word, example):
        self.calls.append(("add_with_affix", word, example))
        engine = self._engine(h)
        engine.words.add(self._text(word))
        if self._text(example) in engine.plural:
            engine.plural.add(self._text(word))
        return self.status.get("add_with_affix", 0)

    def Hunspell_remove(self, h, word):
        self.calls.append(("remove", word))
        self._engine(h).words.discard(self._text(word))
        return self.status.get("remove", 0)

    # -- queries --

    def _known(self, engine, word):
        if word in engine.words:
            return word
        if word.endswith("s") and word[:-1] in engine.plural:
            return word[:-1]
        return None

    def Hunspell_spell(self, h, word):
        self.calls.append(("spell", word))
        return 2 if self._known(self._engine(h), self._text(word)) else 0

    def Hunspell_suggest(self, h, slst, word):
        self.calls.append(("suggest", word))
        w = self._text(word)
        items = [s.encode(self.codec) for s in sorted(self._engine(h).words) if s.startswith(w[:3])]
        return self._out("Hunspell_suggest", slst, items)

    def Hunspell_analyze(self, h, slst, word):
        self.calls.append(("analyze", word))
        w = self._text(word)
        stem = self._known(self._engine(h), w)
        items = []
        if stem is not None:
            items.append((f" st:{stem} fl:S" if stem != w else f" st:{stem}").encode(self.codec))
        return self._out("Hunspell_analyze", slst, items)

    def Hunspell_stem(self, h, slst, word):
        self.calls.append(("stem", word))
        stem = self._known(self._engine(h), self._text(word))
        return self._out("Hunspell_stem", slst, [] if stem is None else [stem.encode(self.codec)])

    def Hunspell_stem2(self, h, slst, desc, n):
        analyses = [ffi.string(desc[i]) for i in range(n)]
        self.calls.append(("stem2", analyses))
        items = [a.split(b"st:")[1].split()[0] for a in analyses if b"st:" in a]
        return self._out("Hunspell_stem2", slst, items)

    def Hunspell_generate(self, h, slst, word, model):
        self.calls.append(("generate", word, model))
        items = [word + b"s"] if model.endswith(b"s") else [word]
        return self._out("Hunspell_generate", slst, items)

    def Hunspell_generate2(self, h, slst, word, desc, n):
        # forms of ``word`` carrying the inflection found in each analysis
        analyses = [ffi.string(desc[i]) for i in range(n)]
        self.calls.append(("generate2", word, analyses))
        text = self._text(word)
        stem = self._known(self._engine(h), text) or text
        items = [(stem + "s" if b"fl:S" in a else stem).encode(self.codec) for a in analyses]
        return self._out("Hunspell_generate2", slst, items)

    def Hunspell_free_list(self, h, slst, n):
        addr = int(ffi.cast("uintptr_t", slst[0]))
        self.freed.append((self.outstanding.pop(addr), n))
        slst[0] = ffi.NULL

    def native_calls(self):
        """Calls that reached the engine, without construction bookkeeping."""
        return [c for c in self.calls if c[0] not in ("create", "destroy")]
