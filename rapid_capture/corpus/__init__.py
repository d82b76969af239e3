from rapid_capture.corpus.registry import Corpus, build_corpus, load_corpus

__all__ = ["Corpus", "build_corpus", "load_corpus"]
