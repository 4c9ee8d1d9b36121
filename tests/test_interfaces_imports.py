def test_can_import_all_protocols():
    # Import must succeed and expose the expected names
    import yeipee.core.interfaces as I

    assert hasattr(I, "FragmentClassifierProtocol")
    assert hasattr(I, "LibraryLoaderProtocol")
    assert hasattr(I, "RendererProtocol")
    assert hasattr(I, "ScopeHandleProtocol")
    assert hasattr(I, "ScriptEvaluatorProtocol")


def test_default_components_satisfy_protocols():
    import yeipee.core.interfaces as I
    from yeipee import FragmentClassifier, FragmentRenderer, LibraryLoader, MiniRacerEvaluator

    evaluator = MiniRacerEvaluator()
    assert isinstance(FragmentClassifier(), I.FragmentClassifierProtocol)
    assert isinstance(LibraryLoader(), I.LibraryLoaderProtocol)
    assert isinstance(evaluator, I.ScriptEvaluatorProtocol)
    assert isinstance(FragmentRenderer(evaluator=evaluator), I.RendererProtocol)
