from next_fast.pipeline import main

main()
